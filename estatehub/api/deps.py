from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from estatehub.core.auth import bearer_scheme
from estatehub.core.config import settings
from estatehub.core.database import get_db
from estatehub.core.exceptions import AuthError, InternalError
from estatehub.db.models import Admin as DBAdmin
from estatehub.modules.admins.service import AdminService
from estatehub.modules.chat.service import ChatService
from estatehub.modules.enquiries.repository import EnquiryRepository
from estatehub.modules.enquiries.service import EnquiryService
from estatehub.modules.listings.repository import ListingRepository
from estatehub.modules.listings.service import ListingService
from estatehub.modules.media.store import MediaStore


def get_media_store(request: Request) -> MediaStore:
    """Media store created at startup"""
    store = getattr(request.app.state, "media_store", None)
    if store is None:
        raise InternalError("Media storage is unavailable")
    return store


def get_chat_service(request: Request) -> ChatService:
    service = getattr(request.app.state, "chat_service", None)
    if service is None:
        raise InternalError("Chat assistant is unavailable")
    return service


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(db)


def get_listing_service(
    db: Session = Depends(get_db),
    media_store: MediaStore = Depends(get_media_store)
) -> ListingService:
    return ListingService(ListingRepository(db), media_store, max_images=settings.MAX_PROPERTY_IMAGES)


def get_listing_reader(db: Session = Depends(get_db)) -> ListingService:
    """Listing service for read-only routes, which never touch the media store"""
    return ListingService(ListingRepository(db), media_store=None, max_images=settings.MAX_PROPERTY_IMAGES)


def get_enquiry_service(db: Session = Depends(get_db)) -> EnquiryService:
    return EnquiryService(EnquiryRepository(db), ListingRepository(db))


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    admin_service: AdminService = Depends(get_admin_service)
) -> DBAdmin:
    """Resolve the bearer token on a protected route to an admin"""
    if not credentials or not credentials.credentials:
        raise AuthError("Not authorized, no token")
    return await admin_service.verify_token(credentials.credentials)
