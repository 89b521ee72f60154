"""Albums, gallery images and the album cover lifecycle."""

import logging
import re
import time
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlsplit
from uuid import UUID

from clubsite.domain.errors import NotFoundError, RepositoryError, ValidationError
from clubsite.domain.files import FileUpload
from clubsite.domain.gallery import Album, GalleryImage, ImageMetadata
from clubsite.services.storage import (
    DEFAULT_MAX_UPLOAD_BYTES,
    ObjectStorage,
    remove_quietly,
    unique_filename,
    validate_image_upload,
)

logger = logging.getLogger(__name__)

_EDITABLE_IMAGE_FIELDS = {"title", "alt", "description", "category", "album_id"}
_EXTENSIONS = {"image/png": "png", "image/gif": "gif", "image/webp": "webp"}


class AlbumRepository(Protocol):
    """Persistence interface for albums."""

    def create_album(self, title: str, description: str | None) -> Album:
        """Create an album without a cover and return it."""

    def get_album(self, album_id: UUID) -> Album | None:
        """Return an album by id, if present."""

    def list_albums(self) -> list[Album]:
        """Return all albums, newest first."""

    def update_album(self, album_id: UUID, fields: dict[str, object]) -> Album:
        """Update descriptive album fields and return the album."""

    def set_cover(self, album_id: UUID, image_path: str | None) -> Album:
        """Set or clear the album cover reference."""

    def clear_covers(self, image_path: str) -> int:
        """Clear every cover that points at image_path and return the count."""

    def delete_album(self, album_id: UUID) -> None:
        """Delete an album row."""


class GalleryImageRepository(Protocol):
    """Persistence interface for gallery image metadata."""

    def create_image(
        self, metadata: ImageMetadata, album_id: UUID | None, storage_path: str
    ) -> GalleryImage:
        """Insert an image metadata row and return it."""

    def get_image(self, image_id: UUID) -> GalleryImage | None:
        """Return an image by id, if present."""

    def get_image_by_path(self, storage_path: str) -> GalleryImage | None:
        """Return the image stored at a path, if present."""

    def list_images(
        self, category: str | None = None, album_id: UUID | None = None
    ) -> list[GalleryImage]:
        """Return images, newest first, optionally filtered."""

    def update_image(self, image_id: UUID, fields: dict[str, object]) -> GalleryImage:
        """Update image metadata and return the image."""

    def detach_album(self, album_id: UUID) -> None:
        """Clear the album reference on every image in the album."""

    def delete_image(self, image_id: UUID) -> None:
        """Delete an image metadata row."""


class ImageFetcher(Protocol):
    """Downloads remote images for import."""

    async def fetch(self, url: str) -> FileUpload:
        """Download url and return its bytes and content type."""


@dataclass
class GalleryService:
    """Application service for albums and gallery images."""

    album_repository: AlbumRepository
    image_repository: GalleryImageRepository
    storage: ObjectStorage
    image_fetcher: ImageFetcher
    bucket: str = "images"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    def create_album(self, title: str, description: str | None = None) -> Album:
        """Create an album with no cover."""
        cleaned = title.strip()
        if not cleaned:
            raise ValidationError("Album title is required")
        return self.album_repository.create_album(cleaned, description or None)

    def list_albums(self) -> list[Album]:
        """Return all albums."""
        return self.album_repository.list_albums()

    def get_album(self, album_id: UUID) -> Album:
        """Return an album or raise NotFoundError."""
        album = self.album_repository.get_album(album_id)
        if album is None:
            raise NotFoundError("Album not found")
        return album

    def update_album(
        self,
        album_id: UUID,
        title: str | None = None,
        description: str | None = None,
    ) -> Album:
        """Update an album's title or description."""
        self.get_album(album_id)
        fields: dict[str, object] = {}
        if title is not None:
            if not title.strip():
                raise ValidationError("Album title is required")
            fields["title"] = title.strip()
        if description is not None:
            fields["description"] = description or None
        if not fields:
            return self.get_album(album_id)
        return self.album_repository.update_album(album_id, fields)

    def upload_image(self, upload: FileUpload, metadata: ImageMetadata) -> GalleryImage:
        """Upload an image that belongs to a category rather than an album."""
        return self._store_image(upload, metadata, album_id=None)

    def upload_image_to_album(
        self, upload: FileUpload, album_id: UUID, metadata: ImageMetadata
    ) -> GalleryImage:
        """Upload an image and register it as a member of an album."""
        self.get_album(album_id)
        return self._store_image(upload, metadata, album_id=album_id)

    async def import_image_from_url(
        self, url: str, category: str | None, album_id: UUID | None = None
    ) -> GalleryImage:
        """Download a remote image and add it to the gallery."""
        if not url.strip():
            raise ValidationError("Image URL is required")
        if album_id is not None:
            self.get_album(album_id)
        fetched = await self.image_fetcher.fetch(url)
        title = title_from_url(url)
        extension = _EXTENSIONS.get(fetched.content_type, "jpg")
        upload = FileUpload(
            data=fetched.data,
            filename=f"{title}.{extension}",
            content_type=fetched.content_type,
        )
        metadata = ImageMetadata(
            title=title,
            alt=title,
            description=f"Imported from {url}",
            category=(category or "").strip() or None,
        )
        return self._store_image(upload, metadata, album_id=album_id)

    def list_images(
        self, category: str | None = None, album_id: UUID | None = None
    ) -> list[GalleryImage]:
        """Return gallery images, optionally by category or album."""
        return self.image_repository.list_images(category=category, album_id=album_id)

    def get_image(self, image_id: UUID) -> GalleryImage:
        """Return an image or raise NotFoundError."""
        image = self.image_repository.get_image(image_id)
        if image is None:
            raise NotFoundError("Image not found")
        return image

    def get_image_url(self, storage_path: str) -> str:
        """Return the public URL of a stored image."""
        return self.storage.get_public_url(self.bucket, storage_path)

    def update_image(self, image_id: UUID, fields: dict[str, object]) -> GalleryImage:
        """Update image metadata. The stored file itself never changes."""
        if "storage_path" in fields:
            raise ValidationError(
                "The image file cannot be replaced; upload a new image instead"
            )
        unknown = set(fields) - _EDITABLE_IMAGE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown image fields: {', '.join(sorted(unknown))}")
        image = self.get_image(image_id)
        if "title" in fields and not str(fields["title"] or "").strip():
            raise ValidationError("Image title is required")

        if "album_id" in fields and fields["album_id"] != image.album_id:
            new_album_id = fields["album_id"]
            if new_album_id is not None:
                self.get_album(new_album_id)  # type: ignore[arg-type]
            if image.album_id is not None:
                old_album = self.album_repository.get_album(image.album_id)
                if old_album and old_album.cover_image_path == image.storage_path:
                    self.album_repository.set_cover(old_album.id, None)

        if not fields:
            return image
        return self.image_repository.update_image(image_id, fields)

    def set_album_cover(self, album_id: UUID, image_path: str) -> Album:
        """Make a member image the album cover."""
        self.get_album(album_id)
        image = self.image_repository.get_image_by_path(image_path)
        if image is None:
            raise NotFoundError("Cover image not found")
        if image.album_id != album_id:
            raise ValidationError("Cover image must belong to the album it covers")
        return self.album_repository.set_cover(album_id, image_path)

    def clear_album_cover(self, album_id: UUID) -> Album:
        """Remove the album cover."""
        self.get_album(album_id)
        return self.album_repository.set_cover(album_id, None)

    def get_album_cover(self, album_id: UUID) -> GalleryImage | None:
        """Return the album's cover image, or None when it has no cover."""
        album = self.get_album(album_id)
        if album.cover_image_path is None:
            return None
        image = self.image_repository.get_image_by_path(album.cover_image_path)
        if image is None or image.album_id != album.id:
            return None
        return image

    def delete_album(self, album_id: UUID) -> None:
        """Delete an album, keeping its images but unassigning them."""
        self.get_album(album_id)
        self.image_repository.detach_album(album_id)
        self.album_repository.delete_album(album_id)
        logger.info("Deleted album", extra={"album_id": str(album_id)})

    def delete_image(self, image_id: UUID) -> None:
        """Delete an image row, clear covers pointing at it, then drop the file."""
        image = self.get_image(image_id)
        cleared = self.album_repository.clear_covers(image.storage_path)
        if cleared:
            logger.info(
                "Cleared album covers for deleted image",
                extra={"image_id": str(image_id), "albums": cleared},
            )
        self.image_repository.delete_image(image_id)
        remove_quietly(self.storage, self.bucket, image.storage_path)

    def _store_image(
        self, upload: FileUpload, metadata: ImageMetadata, album_id: UUID | None
    ) -> GalleryImage:
        if not metadata.title.strip():
            raise ValidationError("Image title is required")
        validate_image_upload(upload, self.max_upload_bytes)
        folder = str(album_id) if album_id else (metadata.category or "uncategorized")
        path = f"gallery/{folder}/{unique_filename(upload.extension)}"
        self.storage.upload(self.bucket, path, upload.data, upload.content_type)
        try:
            return self.image_repository.create_image(metadata, album_id, path)
        except Exception as exc:
            logger.exception(
                "Failed to create gallery image record", extra={"path": path}
            )
            remove_quietly(self.storage, self.bucket, path)
            raise RepositoryError("Failed to create gallery image record") from exc


def title_from_url(url: str) -> str:
    """Derive a human-readable title from the file name in a URL."""
    filename = urlsplit(url).path.rsplit("/", maxsplit=1)[-1]
    if not filename:
        filename = f"image-{int(time.time() * 1000)}.jpg"
    stem = re.sub(r"\.[^/.]+$", "", filename)
    stem = re.sub(r"[-_]", " ", stem)
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), stem)
