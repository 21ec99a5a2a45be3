"""
Error taxonomy shared by services and routers.

Services raise these; the exception handlers registered in ``estatehub.main``
render them as ``{"success": false, "message": ..., "error": ...}``.
"""
from typing import Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response"""

    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(AppError):
    """Malformed or missing input"""
    status_code = 400
    error = "validation_error"


class AuthError(AppError):
    """Missing, invalid or expired credential"""
    status_code = 401
    error = "auth_error"


class NotFoundError(AppError):
    status_code = 404
    error = "not_found"


class ConflictError(AppError):
    """Duplicate value for a unique field"""
    status_code = 400
    error = "conflict"


class MediaError(AppError):
    """Failure talking to the external media host"""
    status_code = 502
    error = "media_error"


class ChatError(AppError):
    """Failure talking to the chat-completions provider"""
    status_code = 502
    error = "chat_error"


class InternalError(AppError):
    status_code = 500
    error = "internal_error"
