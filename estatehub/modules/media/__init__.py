from .store import MediaStore, CloudinaryMediaStore, MediaKind, DeletionResult
from .uploads import MediaUpload, PropertyMediaUploads, read_property_media

__all__ = [
    "MediaStore", "CloudinaryMediaStore", "MediaKind", "DeletionResult",
    "MediaUpload", "PropertyMediaUploads", "read_property_media",
]
