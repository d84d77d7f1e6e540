# storefront/services/upload_service.py
import logging
from collections.abc import Mapping
from pathlib import Path

from storefront.core.errors import NotFound, PayloadTooLarge, ValidationError
from storefront.core.storage_utils import PUBLIC_PREFIX, list_uploads, resolve_upload, save_upload

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

# Profile pictures: no animated gifs.
AVATAR_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}
AVATAR_MAX_BYTES = 2 * 1024 * 1024
AVATAR_SUBDIR = "avatars"


class UploadService:
    """
    Image uploads stored on local disk.

    Files land in `upload_dir` under generated names and are addressed
    publicly as "<public_prefix>/<filename>" ("/images" by default).
    """

    def __init__(
        self,
        upload_dir: str | Path,
        max_bytes: int,
        allowed_types: Mapping[str, str] = ALLOWED_IMAGE_CONTENT_TYPES,
        public_prefix: str = PUBLIC_PREFIX,
    ):
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes
        self.allowed_types = allowed_types
        self.public_prefix = public_prefix

    @classmethod
    def for_avatars(cls, upload_dir: str | Path) -> "UploadService":
        """Profile pictures: own subdirectory, JPEG/PNG/WEBP only, 2MB cap."""
        return cls(
            Path(upload_dir) / AVATAR_SUBDIR,
            AVATAR_MAX_BYTES,
            AVATAR_CONTENT_TYPES,
            public_prefix=f"{PUBLIC_PREFIX}/{AVATAR_SUBDIR}",
        )

    def _validate_and_get_ext(self, content_type: str | None, file_bytes: bytes) -> str:
        if content_type not in self.allowed_types:
            allowed = ", ".join(ext.upper() for ext in self.allowed_types.values())
            raise ValidationError(f"Unsupported image type. Allowed: {allowed}.")

        if not file_bytes:
            raise ValidationError("No file uploaded")

        if len(file_bytes) > self.max_bytes:
            raise PayloadTooLarge(f"Image too large (max {self.max_bytes // (1024 * 1024)}MB).")

        return self.allowed_types[content_type]

    def store(self, content_type: str | None, file_bytes: bytes) -> str:
        """Validate and save an image; returns its public URL path."""
        ext = self._validate_and_get_ext(content_type, file_bytes)
        url = save_upload(self.upload_dir, file_bytes, ext, self.public_prefix)
        logger.info("Stored upload %s (%d bytes)", url, len(file_bytes))
        return url

    def list_files(self) -> list[dict]:
        return list_uploads(self.upload_dir, self.public_prefix)

    def delete(self, filename: str) -> None:
        path = resolve_upload(self.upload_dir, filename)
        if path is None or not path.is_file():
            raise NotFound("File not found")
        path.unlink()
        logger.info("Deleted upload %s", filename)
