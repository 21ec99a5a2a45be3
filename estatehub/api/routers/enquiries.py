from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from estatehub.api.deps import get_current_admin, get_enquiry_service
from estatehub.core.exceptions import AppError, InternalError
from estatehub.db.models import Admin as DBAdmin
from estatehub.models.common import ApiResponse, PaginatedResponse, paginated, parse_pagination
from estatehub.models.enquiry import (
    DeletedEnquiry, Enquiry, EnquiryDetail, EnquiryListItem, EnquiryStats, EnquiryStatusUpdate, EnquirySubmission
)
from estatehub.modules.enquiries.service import EnquiryService
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


# Public endpoints
@router.post("", response_model=ApiResponse[Enquiry], status_code=status.HTTP_201_CREATED)
async def submit_enquiry(
    submission: EnquirySubmission,
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    """
    Submit an enquiry about a listing.

    The enquiry is stored as pending and returned with a summary of the
    listing it refers to.
    """
    try:
        enquiry = await enquiry_service.submit(submission)
        return ApiResponse[Enquiry](
            message="Enquiry submitted successfully. We will contact you soon!",
            data=enquiry
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to submit enquiry: {e}")
        raise InternalError("Failed to submit enquiry")


# Admin endpoints
@router.get("", response_model=PaginatedResponse[EnquiryListItem])
async def get_enquiries(
    status: Optional[str] = Query(None, description="pending, contacted or closed"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_admin: DBAdmin = Depends(get_current_admin),
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    """Get enquiries, newest first, optionally by status."""
    try:
        pagination = parse_pagination(page, limit)
        enquiries, total = await enquiry_service.list_enquiries(pagination, status)
        return paginated(EnquiryListItem, enquiries, total, pagination)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to get enquiries: {e}")
        raise InternalError("Failed to retrieve enquiries")


@router.get("/stats", response_model=ApiResponse[EnquiryStats])
async def get_enquiry_stats(
    current_admin: DBAdmin = Depends(get_current_admin),
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    try:
        stats = await enquiry_service.stats()
        return ApiResponse[EnquiryStats](data=stats)

    except Exception as e:
        logger.error(f"Failed to compute enquiry stats: {e}")
        raise InternalError("Failed to retrieve enquiry statistics")


@router.get("/property/{property_id}", response_model=PaginatedResponse[Enquiry])
async def get_property_enquiries(
    property_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_admin: DBAdmin = Depends(get_current_admin),
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    """Enquiries for one listing, newest first."""
    try:
        pagination = parse_pagination(page, limit)
        enquiries, total = await enquiry_service.list_for_property(property_id, pagination)
        return paginated(Enquiry, enquiries, total, pagination)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to get enquiries for property {property_id}: {e}")
        raise InternalError("Failed to retrieve enquiries")


@router.get("/{enquiry_id}", response_model=ApiResponse[EnquiryDetail])
async def get_enquiry(
    enquiry_id: str,
    current_admin: DBAdmin = Depends(get_current_admin),
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    enquiry = await enquiry_service.get_enquiry(enquiry_id)
    return ApiResponse[EnquiryDetail](data=enquiry)


@router.put("/{enquiry_id}/status", response_model=ApiResponse[Enquiry])
async def update_enquiry_status(
    enquiry_id: str,
    update: EnquiryStatusUpdate,
    current_admin: DBAdmin = Depends(get_current_admin),
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    try:
        enquiry = await enquiry_service.update_status(enquiry_id, update.status)
        return ApiResponse[Enquiry](message="Enquiry status updated successfully", data=enquiry)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update enquiry {enquiry_id}: {e}")
        raise InternalError("Failed to update enquiry status")


@router.delete("/{enquiry_id}", response_model=ApiResponse[DeletedEnquiry])
async def delete_enquiry(
    enquiry_id: str,
    current_admin: DBAdmin = Depends(get_current_admin),
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    try:
        deleted_id = await enquiry_service.delete_enquiry(enquiry_id)
        return ApiResponse[DeletedEnquiry](
            message="Enquiry deleted successfully",
            data=DeletedEnquiry(id=deleted_id)
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete enquiry {enquiry_id}: {e}")
        raise InternalError("Failed to delete enquiry")
