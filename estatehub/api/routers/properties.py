from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from typing import Any, Dict, List, Optional
from estatehub.api.deps import get_current_admin, get_listing_reader, get_listing_service
from estatehub.core.config import settings
from estatehub.core.exceptions import AppError, InternalError
from estatehub.db.models import Admin as DBAdmin
from estatehub.models.common import ApiResponse, ListResponse, PaginatedResponse, paginated, parse_pagination
from estatehub.models.property import Property
from estatehub.modules.listings.service import ListingService
from estatehub.modules.media.uploads import PropertyMediaUploads, read_property_media
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def property_form(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    bhk: Optional[str] = Form(None),
    bathrooms: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    area: Optional[str] = Form(None),
    amenities: Optional[str] = Form(None, description="Comma-separated list or JSON array"),
    featured: Optional[str] = Form(None),
    status: Optional[str] = Form(None, description="available, sold or rented"),
) -> Dict[str, Any]:
    """Listing fields as sent by the admin form; validated by the service"""
    return {
        "title": title,
        "description": description,
        "price": price,
        "bhk": bhk,
        "bathrooms": bathrooms,
        "city": city,
        "address": address,
        "area": area,
        "amenities": amenities,
        "featured": featured,
        "status": status,
    }


async def property_media(
    images: Optional[List[UploadFile]] = File(None, description="Up to 5 images"),
    video: Optional[List[UploadFile]] = File(None, description="At most one video"),
) -> PropertyMediaUploads:
    return await read_property_media(
        images,
        video,
        max_images=settings.MAX_PROPERTY_IMAGES,
        max_bytes=settings.max_upload_size_bytes
    )


def _properties(records) -> List[Property]:
    return [Property.model_validate(record) for record in records]


# Public endpoints
@router.get("", response_model=PaginatedResponse[Property])
async def get_properties(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    limit: Optional[str] = Query(None, description="Page size, defaults to 10"),
    listing_service: ListingService = Depends(get_listing_reader)
):
    """Get listings, newest first."""
    try:
        pagination = parse_pagination(page, limit)
        records, total = await listing_service.list_properties(pagination)
        return paginated(Property, _properties(records), total, pagination)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to get properties: {e}")
        raise InternalError("Failed to retrieve properties")


@router.get("/filter", response_model=PaginatedResponse[Property])
async def filter_properties(
    city: Optional[str] = Query(None, description="Case-insensitive substring of the city"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    bhk: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, description="newest, price_asc, price_desc, bhk_asc or bhk_desc"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    listing_service: ListingService = Depends(get_listing_reader)
):
    """
    Filter listings by city, price range and BHK.

    Price bounds are inclusive; results are paginated like the plain listing.
    """
    try:
        pagination = parse_pagination(page, limit)
        records, total = await listing_service.filter_properties(
            {"city": city, "min_price": min_price, "max_price": max_price, "bhk": bhk, "sort": sort},
            pagination
        )
        return paginated(Property, _properties(records), total, pagination)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to filter properties: {e}")
        raise InternalError("Failed to filter properties")


@router.get("/cities", response_model=ListResponse[str])
async def get_cities(listing_service: ListingService = Depends(get_listing_reader)):
    """Distinct cities across all listings, sorted."""
    try:
        cities = await listing_service.get_cities()
        return ListResponse[str](count=len(cities), data=cities)

    except Exception as e:
        logger.error(f"Failed to get cities: {e}")
        raise InternalError("Failed to retrieve cities")


@router.get("/{property_id}", response_model=ApiResponse[Property])
async def get_property(
    property_id: str,
    listing_service: ListingService = Depends(get_listing_reader)
):
    record = await listing_service.get_property(property_id)
    return ApiResponse[Property](data=Property.model_validate(record))


# Admin endpoints
@router.post("", response_model=ApiResponse[Property], status_code=status.HTTP_201_CREATED)
async def create_property(
    current_admin: DBAdmin = Depends(get_current_admin),
    form: Dict[str, Any] = Depends(property_form),
    media: PropertyMediaUploads = Depends(property_media),
    listing_service: ListingService = Depends(get_listing_service)
):
    """
    Create a listing from a multipart form.

    Images and video are uploaded to the media host before the listing is
    stored; if any upload fails nothing is stored.
    """
    try:
        record = await listing_service.create_property(form, media)
        return ApiResponse[Property](
            message="Property created successfully",
            data=Property.model_validate(record)
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to create property: {e}")
        raise InternalError("Failed to create property", detail=str(e))


@router.put("/{property_id}", response_model=ApiResponse[Property])
async def update_property(
    property_id: str,
    current_admin: DBAdmin = Depends(get_current_admin),
    form: Dict[str, Any] = Depends(property_form),
    media: PropertyMediaUploads = Depends(property_media),
    listing_service: ListingService = Depends(get_listing_service)
):
    """Update provided fields, append images and/or replace the video."""
    try:
        record = await listing_service.update_property(property_id, form, media)
        return ApiResponse[Property](
            message="Property updated successfully",
            data=Property.model_validate(record)
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update property {property_id}: {e}")
        raise InternalError("Failed to update property")


@router.delete("/{property_id}", response_model=ApiResponse[None])
async def delete_property(
    property_id: str,
    current_admin: DBAdmin = Depends(get_current_admin),
    listing_service: ListingService = Depends(get_listing_service)
):
    """Delete a listing and release its media."""
    try:
        await listing_service.delete_property(property_id)
        return ApiResponse[None](message="Property deleted successfully")

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete property {property_id}: {e}")
        raise InternalError("Failed to delete property")


@router.delete("/{property_id}/images/{image_index}", response_model=ApiResponse[Property])
async def delete_property_image(
    property_id: str,
    image_index: str,
    current_admin: DBAdmin = Depends(get_current_admin),
    listing_service: ListingService = Depends(get_listing_service)
):
    """Delete one image by its position in the listing's image list."""
    try:
        record = await listing_service.delete_image(property_id, image_index)
        return ApiResponse[Property](
            message="Image deleted successfully",
            data=Property.model_validate(record)
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete image {image_index} of property {property_id}: {e}")
        raise InternalError("Failed to delete image")
