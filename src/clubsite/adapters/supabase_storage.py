"""Supabase Storage implementation of the object storage interface."""

import logging
from dataclasses import dataclass

from supabase import Client

from clubsite.domain.errors import StorageError
from clubsite.services.storage import ObjectStorage

logger = logging.getLogger(__name__)


@dataclass
class SupabaseObjectStorage(ObjectStorage):
    """Object storage backed by Supabase Storage buckets."""

    client: Client

    def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """Upload bytes to a bucket path."""
        try:
            self.client.storage.from_(bucket).upload(
                path,
                data,
                {
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "true" if upsert else "false",
                },
            )
        except Exception as exc:
            logger.error(
                "Failed to upload file",
                exc_info=True,
                extra={"bucket": bucket, "path": path},
            )
            raise StorageError("Failed to upload file") from exc
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        """Return the public URL of an object."""
        try:
            return self.client.storage.from_(bucket).get_public_url(path)
        except Exception as exc:
            raise StorageError("Failed to build public URL") from exc

    def remove(self, bucket: str, paths: list[str]) -> None:
        """Remove objects from a bucket."""
        if not paths:
            return
        try:
            self.client.storage.from_(bucket).remove(paths)
        except Exception as exc:
            raise StorageError("Failed to delete file") from exc

    def list_buckets(self) -> list[str]:
        """Return the names of all buckets."""
        try:
            buckets = self.client.storage.list_buckets()
        except Exception as exc:
            logger.error("Failed to list storage buckets", exc_info=True)
            raise StorageError("Failed to list storage buckets") from exc
        return [bucket.name for bucket in buckets]

    def create_bucket(
        self,
        name: str,
        public: bool,
        file_size_limit: int,
        allowed_mime_types: list[str],
    ) -> None:
        """Create a bucket with upload restrictions."""
        try:
            self.client.storage.create_bucket(
                name,
                options={
                    "public": public,
                    "file_size_limit": file_size_limit,
                    "allowed_mime_types": allowed_mime_types,
                },
            )
        except Exception as exc:
            logger.error(
                "Failed to create storage bucket",
                exc_info=True,
                extra={"bucket": name},
            )
            raise StorageError(f"Failed to create bucket {name}") from exc
