from fastapi import APIRouter, Depends, status
from estatehub.api.deps import get_admin_service, get_current_admin
from estatehub.core.exceptions import AppError, InternalError
from estatehub.db.models import Admin as DBAdmin
from estatehub.models.admin import (
    AdminLogin, AdminProfile, AdminProfileUpdate, AdminRegistration, AdminToken
)
from estatehub.models.common import ApiResponse
from estatehub.modules.admins.service import AdminService
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


# Authentication endpoints
@router.post("/register", response_model=ApiResponse[AdminToken], status_code=status.HTTP_201_CREATED)
async def register_admin(
    registration: AdminRegistration,
    admin_service: AdminService = Depends(get_admin_service)
):
    """
    Register a new admin account.

    Returns the admin identity together with a bearer token.
    """
    try:
        admin = await admin_service.register(registration)
        return ApiResponse[AdminToken](message="Admin registered successfully", data=admin)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Admin registration failed: {e}")
        raise InternalError("Registration failed")


@router.post("/login", response_model=ApiResponse[AdminToken])
async def login_admin(
    credentials: AdminLogin,
    admin_service: AdminService = Depends(get_admin_service)
):
    """Authenticate an admin and return a bearer token."""
    try:
        admin = await admin_service.login(credentials)
        return ApiResponse[AdminToken](message="Login successful", data=admin)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Login failed: {e}")
        raise InternalError("Login failed")


# Profile endpoints
@router.get("/profile", response_model=ApiResponse[AdminProfile])
async def get_admin_profile(
    current_admin: DBAdmin = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service)
):
    """Get the signed-in admin's profile."""
    profile = await admin_service.get_profile(current_admin.id)
    return ApiResponse[AdminProfile](data=profile)


@router.put("/profile", response_model=ApiResponse[AdminToken])
async def update_admin_profile(
    patch: AdminProfileUpdate,
    current_admin: DBAdmin = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service)
):
    """
    Update name, email and/or password of the signed-in admin.

    A new token is issued with the response.
    """
    try:
        admin = await admin_service.update_profile(current_admin.id, patch)
        return ApiResponse[AdminToken](message="Profile updated successfully", data=admin)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update admin profile: {e}")
        raise InternalError("Failed to update profile")
