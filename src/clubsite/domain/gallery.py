"""Domain models for the photo gallery."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Album:
    """Named grouping of gallery images with an optional cover."""

    id: UUID
    title: str
    description: str | None
    cover_image_path: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class GalleryImage:
    """Metadata row for an image stored in the object store."""

    id: UUID
    title: str
    alt: str
    description: str
    category: str | None
    album_id: UUID | None
    storage_path: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ImageMetadata:
    """Editable descriptive fields supplied with an upload."""

    title: str
    alt: str = ""
    description: str = ""
    category: str | None = None
