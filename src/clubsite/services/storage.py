"""Object storage interface and bucket administration."""

import logging
import time
from dataclasses import dataclass, field
from secrets import token_hex
from typing import Protocol

from clubsite.domain.errors import ValidationError
from clubsite.domain.files import FileUpload

logger = logging.getLogger(__name__)

IMAGE_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
BUCKET_FILE_SIZE_LIMIT = 50 * 1024 * 1024


class ObjectStorage(Protocol):
    """Bucket-scoped file storage."""

    def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """Store bytes at path and return the stored path."""

    def get_public_url(self, bucket: str, path: str) -> str:
        """Return the public URL for a stored object."""

    def remove(self, bucket: str, paths: list[str]) -> None:
        """Delete stored objects."""

    def list_buckets(self) -> list[str]:
        """Return the names of existing buckets."""

    def create_bucket(
        self,
        name: str,
        public: bool,
        file_size_limit: int,
        allowed_mime_types: list[str],
    ) -> None:
        """Create a bucket."""


def validate_image_upload(
    upload: FileUpload, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
) -> None:
    """Reject empty, oversized or non-image uploads."""
    if not upload.data:
        raise ValidationError("No file provided")
    if upload.content_type not in IMAGE_CONTENT_TYPES:
        raise ValidationError(
            "Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed."
        )
    if upload.size > max_bytes:
        raise upload_too_large(max_bytes)


def upload_too_large(max_bytes: int) -> ValidationError:
    """Return the error for a file over the upload limit."""
    limit_mb = max_bytes // (1024 * 1024)
    return ValidationError(f"File size exceeds {limit_mb}MB limit.")


def unique_filename(extension: str) -> str:
    """Return a collision-resistant file name with the given extension."""
    return f"{int(time.time() * 1000)}-{token_hex(6)}.{extension}"


def remove_quietly(storage: ObjectStorage, bucket: str, path: str) -> None:
    """Best-effort removal used for compensation and cleanup."""
    try:
        storage.remove(bucket, [path])
    except Exception:
        logger.warning(
            "Failed to remove stored object",
            exc_info=True,
            extra={"bucket": bucket, "path": path},
        )


@dataclass
class StorageAdminService:
    """Checks and provisions the buckets the site depends on."""

    storage: ObjectStorage
    required_buckets: list[str] = field(default_factory=list)

    def check_buckets(self) -> dict[str, bool]:
        """Return whether each required bucket exists."""
        existing = set(self.storage.list_buckets())
        return {name: name in existing for name in self.required_buckets}

    def create_bucket(self, name: str) -> None:
        """Create a public image bucket."""
        if not name.strip():
            raise ValidationError("Bucket name is required")
        self.storage.create_bucket(
            name.strip(),
            public=True,
            file_size_limit=BUCKET_FILE_SIZE_LIMIT,
            allowed_mime_types=sorted(IMAGE_CONTENT_TYPES),
        )
        logger.info("Created storage bucket", extra={"bucket": name})
