"""
Listing lifecycle: create, update and delete listings together with their
media on the external host.

Ordering rules:
- all uploads for a request finish before the record is written; a failed
  upload aborts the write and releases whatever the request already uploaded
- a replaced video is released only after the new one is uploaded and stored
- media releases on delete are best-effort and never block the record delete
"""
import asyncio
from typing import Any, Dict, List, Optional, Tuple

from estatehub.core.exceptions import MediaError, NotFoundError, ValidationError
from estatehub.db.models import Property as PropertyRecord
from estatehub.models.common import Pagination, is_blank, validate_input
from estatehub.models.property import MediaHandle, PropertyCreate, PropertyFilter, PropertyUpdate
from estatehub.modules.listings.repository import ListingRepository
from estatehub.modules.media.store import DeletionResult, MediaKind, MediaStore
from estatehub.modules.media.uploads import PropertyMediaUploads
import logging

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "price", "city", "bhk", "bathrooms", "area")


def _handle_to_json(handle: MediaHandle) -> Dict[str, str]:
    return handle.model_dump(by_alias=True)


def _present(form: Dict[str, Any]) -> Dict[str, Any]:
    """Drop fields the client left empty"""
    return {key: value for key, value in form.items() if not is_blank(value)}


class ListingService:
    """Service for listing queries and the listing media lifecycle"""

    def __init__(self, repository: ListingRepository, media_store: Optional[MediaStore], max_images: int = 5):
        self.repository = repository
        self.media_store = media_store
        self.max_images = max_images

    # Queries

    async def list_properties(self, pagination: Pagination) -> Tuple[List[PropertyRecord], int]:
        return self.repository.list(pagination)

    async def filter_properties(self, raw_filter: Dict[str, Any],
                                pagination: Pagination) -> Tuple[List[PropertyRecord], int]:
        criteria = validate_input(PropertyFilter, _present(raw_filter))
        return self.repository.filter(criteria, pagination)

    async def get_property(self, property_id: str) -> PropertyRecord:
        record = self.repository.get(property_id)
        if not record:
            raise NotFoundError("Property not found")
        return record

    async def get_cities(self) -> List[str]:
        return self.repository.distinct_cities()

    # Lifecycle

    async def create_property(self, form: Dict[str, Any], media: PropertyMediaUploads) -> PropertyRecord:
        """Validate, upload media, then persist the new listing"""
        if any(is_blank(form.get(name)) for name in REQUIRED_FIELDS):
            raise ValidationError("Please fill all required fields")

        fields = validate_input(PropertyCreate, _present(form))

        if len(media.images) > self.max_images:
            raise ValidationError(f"Maximum {self.max_images} images allowed")

        images, video = await self._upload_media(media)

        values = fields.model_dump()
        values["status"] = fields.status.value
        values["images"] = [_handle_to_json(handle) for handle in images]
        values["video"] = _handle_to_json(video) if video else None

        try:
            record = self.repository.add(values)
        except Exception as e:
            logger.error(f"Failed to store new property, releasing its media: {e}")
            await self._release(images, video)
            raise

        logger.info(
            f"Created property {record.id} with {len(images)} images"
            f"{' and a video' if video else ''}"
        )
        return record

    async def update_property(self, property_id: str, form: Dict[str, Any],
                              media: PropertyMediaUploads) -> PropertyRecord:
        """Apply provided fields, append images and replace the video"""
        record = await self.get_property(property_id)

        patch = validate_input(PropertyUpdate, _present(form))
        changes = patch.model_dump(exclude_unset=True)
        if patch.status is not None:
            changes["status"] = patch.status.value

        existing_images = list(record.images or [])
        if media.images and len(existing_images) + len(media.images) > self.max_images:
            raise ValidationError(f"Total images cannot exceed {self.max_images}")

        new_images, new_video = await self._upload_media(media)

        if new_images:
            changes["images"] = existing_images + [_handle_to_json(handle) for handle in new_images]

        previous_video = dict(record.video) if record.video else None
        if new_video:
            changes["video"] = _handle_to_json(new_video)

        try:
            record = self.repository.save(record, changes)
        except Exception as e:
            logger.error(f"Failed to update property {property_id}, releasing new media: {e}")
            await self._release(new_images, new_video)
            raise

        if new_video and previous_video and previous_video.get("publicId"):
            await self.media_store.delete_one(previous_video["publicId"], MediaKind.VIDEO)

        logger.info(f"Updated property {record.id}")
        return record

    async def delete_image(self, property_id: str, image_index: Any) -> PropertyRecord:
        """Release one image and drop it from the ordered list"""
        record = await self.get_property(property_id)
        images = list(record.images or [])

        try:
            index = int(str(image_index).strip())
        except ValueError:
            raise ValidationError("Invalid image index")
        if index < 0 or index >= len(images):
            raise ValidationError("Invalid image index")

        image = images[index]
        if image.get("publicId"):
            await self.media_store.delete_one(image["publicId"], MediaKind.IMAGE)

        remaining = images[:index] + images[index + 1:]
        return self.repository.save(record, {"images": remaining})

    async def delete_property(self, property_id: str) -> List[DeletionResult]:
        """Release all media (best-effort), then delete the record regardless"""
        record = await self.get_property(property_id)

        image_ids = [image.get("publicId") for image in (record.images or [])]
        video_id = (record.video or {}).get("publicId")

        deletions = [self.media_store.delete_many(image_ids, MediaKind.IMAGE)]
        if video_id:
            deletions.append(self.media_store.delete_many([video_id], MediaKind.VIDEO))

        results: List[DeletionResult] = []
        for batch in await asyncio.gather(*deletions):
            results.extend(batch)

        failed = [result.public_id for result in results if not result.ok]
        if failed:
            logger.warning(
                f"Deleting property {record.id} left {len(failed)} orphaned media assets: {failed}"
            )

        self.repository.delete(record)
        logger.info(f"Deleted property {property_id}")
        return results

    # Helpers

    async def _upload_media(self, media: PropertyMediaUploads) -> Tuple[List[MediaHandle], Optional[MediaHandle]]:
        images = await self.media_store.upload_images(media.image_buffers)

        video = None
        if media.video:
            try:
                video = await self.media_store.upload_video(media.video.data)
            except MediaError:
                await self._release(images, None)
                raise
        return images, video

    async def _release(self, images: List[MediaHandle], video: Optional[MediaHandle]) -> None:
        if images:
            await self.media_store.delete_many([h.public_id for h in images], MediaKind.IMAGE)
        if video:
            await self.media_store.delete_one(video.public_id, MediaKind.VIDEO)
