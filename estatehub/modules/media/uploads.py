"""
Intake checks for the multipart ``images`` and ``video`` fields.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import UploadFile

from estatehub.core.exceptions import ValidationError


@dataclass
class MediaUpload:
    filename: str
    content_type: str
    data: bytes


@dataclass
class PropertyMediaUploads:
    images: List[MediaUpload] = field(default_factory=list)
    video: Optional[MediaUpload] = None

    @property
    def image_buffers(self) -> List[bytes]:
        return [upload.data for upload in self.images]


async def _read_part(upload: UploadFile, expected_type: str, max_bytes: int) -> Optional[MediaUpload]:
    data = await upload.read(max_bytes + 1)
    if not upload.filename and not data:
        # Browsers send an empty part for an untouched file input
        return None

    content_type = upload.content_type or ""
    if not content_type.startswith(f"{expected_type}/"):
        label = "images" if expected_type == "image" else "videos"
        raise ValidationError(f"Only {expected_type} files are allowed for {label}")

    if len(data) > max_bytes:
        name = upload.filename or "Upload"
        raise ValidationError(f"{name} exceeds the {max_bytes // (1024 * 1024)}MB limit")

    return MediaUpload(filename=upload.filename or "", content_type=content_type, data=data)


async def read_property_media(images: Optional[List[UploadFile]],
                              videos: Optional[List[UploadFile]],
                              max_images: int,
                              max_bytes: int) -> PropertyMediaUploads:
    """Read and check the media parts of a listing form"""
    result = PropertyMediaUploads()

    for upload in images or []:
        part = await _read_part(upload, "image", max_bytes)
        if part:
            result.images.append(part)

    if len(result.images) > max_images:
        raise ValidationError(f"Maximum {max_images} images allowed")

    video_parts = []
    for upload in videos or []:
        part = await _read_part(upload, "video", max_bytes)
        if part:
            video_parts.append(part)

    if len(video_parts) > 1:
        raise ValidationError("Only one video allowed")
    result.video = video_parts[0] if video_parts else None

    return result
