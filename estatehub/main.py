from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from estatehub.api.routers import admin, chat, enquiries, properties
from estatehub.core.config import settings
from estatehub.core.database import Base, engine
from estatehub.core.exceptions import AppError
from estatehub.core.logging_config import configure_logging
from estatehub.models.common import ErrorResponse
from estatehub.modules.chat.service import ChatService
from estatehub.modules.media.store import CloudinaryMediaStore
import logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="EstateHub API",
    description="Real-estate listings with media, visitor enquiries and an admin back office",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(properties.router, prefix="/api/properties", tags=["properties"])
app.include_router(enquiries.router, prefix="/api/enquiries", tags=["enquiries"])
app.include_router(chat.router, prefix="/api/chatbot", tags=["chatbot"])


def _error_response(status_code: int, message: str, error: str = None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.detail})")
    return _error_response(exc.status_code, exc.message, exc.detail or exc.error)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        field = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid {field}: {errors[0].get('msg')}" if field else errors[0].get("msg", message)
    return _error_response(400, message, "validation_error")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return _error_response(exc.status_code, message, "http_error")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _error_response(500, "Internal server error", "internal_error")


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup"""
    configure_logging()
    try:
        if settings.CREATE_TABLES_ON_STARTUP:
            Base.metadata.create_all(bind=engine)

        app.state.media_store = CloudinaryMediaStore.from_settings()
        if not app.state.media_store.configured:
            logger.warning("Cloudinary credentials are not set, media uploads will fail")

        app.state.chat_service = ChatService.from_settings()

        logger.info("Application startup completed successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    try:
        media_store = getattr(app.state, "media_store", None)
        if media_store is not None:
            await media_store.close()

        chat_service = getattr(app.state, "chat_service", None)
        if chat_service is not None:
            await chat_service.close()

        logger.info("Application shutdown completed successfully")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


@app.get("/api/health")
async def health_check():
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
