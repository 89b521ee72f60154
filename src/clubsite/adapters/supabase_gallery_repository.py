"""Supabase-backed album and gallery image repositories."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from clubsite.adapters.supabase_support import execute, first_row
from clubsite.adapters.tables import ALBUMS, GALLERY_IMAGES
from clubsite.domain.gallery import Album, GalleryImage, ImageMetadata
from clubsite.services.gallery import AlbumRepository, GalleryImageRepository


@dataclass
class SupabaseAlbumRepository(AlbumRepository):
    """Supabase implementation for albums."""

    client: Client

    def create_album(self, title: str, description: str | None) -> Album:
        """Create an album row without a cover."""
        response = execute(
            self.client.table(ALBUMS.table).insert(
                ALBUMS.to_row(
                    {
                        "title": title,
                        "description": description,
                        "cover_image_path": None,
                    }
                )
            ),
            "Failed to create album",
        )
        return ALBUMS.from_row(first_row(response, "Failed to create album"))

    def get_album(self, album_id: UUID) -> Album | None:
        """Return an album by id, if present."""
        response = execute(
            self.client.table(ALBUMS.table)
            .select(ALBUMS.selection)
            .eq("id", str(album_id))
            .limit(1),
            "Failed to fetch album",
        )
        if not response.data:
            return None
        return ALBUMS.from_row(response.data[0])

    def list_albums(self) -> list[Album]:
        """Return all albums, newest first."""
        response = execute(
            self.client.table(ALBUMS.table)
            .select(ALBUMS.selection)
            .order("created_at", desc=True),
            "Failed to fetch albums",
        )
        return [ALBUMS.from_row(row) for row in response.data or []]

    def update_album(self, album_id: UUID, fields: dict[str, object]) -> Album:
        """Update album fields and return the album."""
        return self._update(album_id, fields, "Failed to update album")

    def set_cover(self, album_id: UUID, image_path: str | None) -> Album:
        """Set or clear the cover reference."""
        return self._update(
            album_id, {"cover_image_path": image_path}, "Failed to set album cover"
        )

    def clear_covers(self, image_path: str) -> int:
        """Clear covers that reference image_path."""
        response = execute(
            self.client.table(ALBUMS.table)
            .update(
                ALBUMS.to_row(
                    {"cover_image_path": None, "updated_at": datetime.now(tz=UTC)}
                )
            )
            .eq("cover_image_path", image_path),
            "Failed to clear album covers",
        )
        return len(response.data or [])

    def delete_album(self, album_id: UUID) -> None:
        """Delete an album row."""
        execute(
            self.client.table(ALBUMS.table).delete().eq("id", str(album_id)),
            "Failed to delete album",
        )

    def _update(self, album_id: UUID, fields: dict[str, object], failure: str) -> Album:
        payload = ALBUMS.to_row({**fields, "updated_at": datetime.now(tz=UTC)})
        response = execute(
            self.client.table(ALBUMS.table).update(payload).eq("id", str(album_id)),
            failure,
        )
        return ALBUMS.from_row(first_row(response, failure))


@dataclass
class SupabaseGalleryImageRepository(GalleryImageRepository):
    """Supabase implementation for gallery image metadata."""

    client: Client

    def create_image(
        self, metadata: ImageMetadata, album_id: UUID | None, storage_path: str
    ) -> GalleryImage:
        """Insert an image metadata row."""
        response = execute(
            self.client.table(GALLERY_IMAGES.table).insert(
                GALLERY_IMAGES.to_row(
                    {
                        "title": metadata.title,
                        "alt": metadata.alt,
                        "description": metadata.description,
                        "category": metadata.category,
                        "album_id": album_id,
                        "storage_path": storage_path,
                    }
                )
            ),
            "Failed to create gallery image record",
        )
        return GALLERY_IMAGES.from_row(
            first_row(response, "Failed to create gallery image record")
        )

    def get_image(self, image_id: UUID) -> GalleryImage | None:
        """Return an image by id, if present."""
        return self._first("id", str(image_id))

    def get_image_by_path(self, storage_path: str) -> GalleryImage | None:
        """Return the image stored at a path, if present."""
        return self._first("storage_path", storage_path)

    def list_images(
        self, category: str | None = None, album_id: UUID | None = None
    ) -> list[GalleryImage]:
        """Return images, newest first."""
        query = self.client.table(GALLERY_IMAGES.table).select(GALLERY_IMAGES.selection)
        if category:
            query = query.eq("category", category)
        if album_id:
            query = query.eq("album_id", str(album_id))
        response = execute(
            query.order("created_at", desc=True), "Failed to fetch gallery images"
        )
        return [GALLERY_IMAGES.from_row(row) for row in response.data or []]

    def update_image(self, image_id: UUID, fields: dict[str, object]) -> GalleryImage:
        """Update image metadata."""
        failure = "Failed to update gallery image"
        response = execute(
            self.client.table(GALLERY_IMAGES.table)
            .update(
                GALLERY_IMAGES.to_row({**fields, "updated_at": datetime.now(tz=UTC)})
            )
            .eq("id", str(image_id)),
            failure,
        )
        return GALLERY_IMAGES.from_row(first_row(response, failure))

    def detach_album(self, album_id: UUID) -> None:
        """Null out the album reference on member images."""
        execute(
            self.client.table(GALLERY_IMAGES.table)
            .update(
                GALLERY_IMAGES.to_row(
                    {"album_id": None, "updated_at": datetime.now(tz=UTC)}
                )
            )
            .eq("album_id", str(album_id)),
            "Failed to detach album images",
        )

    def delete_image(self, image_id: UUID) -> None:
        """Delete an image metadata row."""
        execute(
            self.client.table(GALLERY_IMAGES.table).delete().eq("id", str(image_id)),
            "Failed to delete gallery image record",
        )

    def _first(self, column: str, value: str) -> GalleryImage | None:
        response = execute(
            self.client.table(GALLERY_IMAGES.table)
            .select(GALLERY_IMAGES.selection)
            .eq(column, value)
            .limit(1),
            "Failed to fetch gallery image",
        )
        if not response.data:
            return None
        return GALLERY_IMAGES.from_row(response.data[0])
