"""
Media store adapters for listing images and videos.

Uploads are single round trips with no retry. Deletes are best-effort: they
return a DeletionResult per asset instead of raising, so callers can release
media without blocking their own write.
"""
import asyncio
import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from estatehub.core.config import settings
from estatehub.core.exceptions import MediaError
from estatehub.models.property import MediaHandle


logger = logging.getLogger(__name__)


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


@dataclass
class DeletionResult:
    public_id: str
    ok: bool
    error: Optional[str] = None


class MediaStore(ABC):
    """Base class for external media hosts"""

    @abstractmethod
    async def upload(self, data: bytes, kind: MediaKind) -> MediaHandle:
        """Upload one asset, raising MediaError on any failure"""
        pass

    @abstractmethod
    async def destroy(self, public_id: str, kind: MediaKind) -> None:
        """Remove one asset, raising MediaError on any failure"""
        pass

    async def close(self) -> None:
        pass

    async def upload_image(self, data: bytes) -> MediaHandle:
        return await self.upload(data, MediaKind.IMAGE)

    async def upload_video(self, data: bytes) -> MediaHandle:
        return await self.upload(data, MediaKind.VIDEO)

    async def upload_images(self, buffers: List[bytes]) -> List[MediaHandle]:
        """
        Upload a batch of images in parallel.

        The batch succeeds or fails as a whole: if any upload fails, the
        images that did make it are released and MediaError is raised.
        """
        if not buffers:
            return []

        results = await asyncio.gather(
            *(self.upload_image(data) for data in buffers),
            return_exceptions=True
        )

        failures = [r for r in results if isinstance(r, Exception)]
        if not failures:
            return list(results)

        uploaded = [r.public_id for r in results if isinstance(r, MediaHandle)]
        logger.error(
            f"{len(failures)} of {len(buffers)} image uploads failed, "
            f"releasing {len(uploaded)} uploaded images"
        )
        if uploaded:
            await self.delete_many(uploaded, MediaKind.IMAGE)

        first = failures[0]
        if isinstance(first, MediaError):
            raise first
        raise MediaError("Image upload failed", detail=str(first))

    async def delete_one(self, public_id: str, kind: MediaKind) -> DeletionResult:
        try:
            await self.destroy(public_id, kind)
        except Exception as e:
            logger.warning(f"Failed to delete {kind.value} {public_id}: {e}")
            return DeletionResult(public_id=public_id, ok=False, error=str(e))
        return DeletionResult(public_id=public_id, ok=True)

    async def delete_many(self, public_ids: Iterable[str], kind: MediaKind) -> List[DeletionResult]:
        ids = [public_id for public_id in public_ids if public_id]
        if not ids:
            return []
        results = await asyncio.gather(*(self.delete_one(public_id, kind) for public_id in ids))
        return list(results)


class CloudinaryMediaStore(MediaStore):
    """Uploads and deletes through the Cloudinary SDK, run in worker threads"""

    FOLDERS = {
        MediaKind.IMAGE: "properties/images",
        MediaKind.VIDEO: "properties/videos",
    }

    # Incoming transformations, applied before the asset is stored
    TRANSFORMATIONS = {
        MediaKind.IMAGE: [{"width": 1200, "height": 800, "crop": "limit"}, {"quality": "auto:good"}],
        MediaKind.VIDEO: [{"width": 1280, "height": 720, "crop": "limit"}, {"quality": "auto"}],
    }

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: float = 120.0):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "CloudinaryMediaStore":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            timeout=settings.MEDIA_TIMEOUT_SECONDS,
        )

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _options(self) -> Dict[str, Any]:
        if not self.configured:
            raise MediaError("Media storage is not configured")
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "timeout": self.timeout,
        }

    async def upload(self, data: bytes, kind: MediaKind) -> MediaHandle:
        options = self._options()
        label = kind.value.capitalize()

        try:
            payload = await asyncio.to_thread(
                cloudinary.uploader.upload,
                io.BytesIO(data),
                folder=self.FOLDERS[kind],
                resource_type=kind.value,
                transformation=self.TRANSFORMATIONS[kind],
                **options
            )
        except (CloudinaryError, OSError) as e:
            logger.error(f"{label} upload failed: {e}")
            raise MediaError(f"{label} upload failed", detail=str(e))

        try:
            handle = MediaHandle(url=payload["secure_url"], public_id=payload["public_id"])
        except (KeyError, TypeError) as e:
            raise MediaError(f"{label} upload failed", detail=f"missing {e}")

        logger.info(f"Uploaded {kind.value} {handle.public_id}")
        return handle

    async def destroy(self, public_id: str, kind: MediaKind) -> None:
        options = self._options()
        label = kind.value.capitalize()

        try:
            payload = await asyncio.to_thread(
                cloudinary.uploader.destroy, public_id, resource_type=kind.value, **options
            )
        except (CloudinaryError, OSError) as e:
            raise MediaError(f"{label} deletion failed", detail=str(e))

        result = payload.get("result") if isinstance(payload, dict) else payload
        if result == "not found":
            logger.info(f"{label} {public_id} was already gone")
        elif result != "ok":
            raise MediaError(f"{label} deletion failed", detail=str(result))
