"""Album and gallery image endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from clubsite.api.dependencies import get_container, read_required_file, require_admin
from clubsite.api.schemas import (
    AlbumIn,
    AlbumOut,
    AlbumPatch,
    CoverIn,
    GalleryImageOut,
    ImageForm,
    ImageImportIn,
    ImagePatch,
    envelope,
    serialize,
)
from clubsite.containers import AppContainer
from clubsite.domain.gallery import Album, GalleryImage, ImageMetadata
from clubsite.services.gallery import GalleryService

router = APIRouter(tags=["gallery"])


def _album(service: GalleryService, album: Album) -> dict[str, object]:
    cover_url = (
        service.get_image_url(album.cover_image_path)
        if album.cover_image_path
        else None
    )
    return serialize(AlbumOut, album, cover_image_url=cover_url)


def _image(service: GalleryService, image: GalleryImage) -> dict[str, object]:
    return serialize(
        GalleryImageOut, image, url=service.get_image_url(image.storage_path)
    )


def _metadata(fields: dict[str, str]) -> ImageMetadata:
    form = ImageForm.model_validate(fields)
    return ImageMetadata(
        title=form.title.strip(),
        alt=form.alt.strip() or form.title.strip(),
        description=form.description.strip(),
        category=(form.category or "").strip() or None,
    )


@router.get("/albums")
async def list_albums(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return all albums."""
    service = container.gallery_service
    return envelope([_album(service, album) for album in service.list_albums()])


@router.post("/albums", status_code=201, dependencies=[Depends(require_admin)])
async def create_album(
    payload: AlbumIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create an album."""
    service = container.gallery_service
    album = service.create_album(payload.title, payload.description)
    return envelope(_album(service, album), "Album created")


@router.get("/albums/{album_id}")
async def get_album(
    album_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return an album with its images."""
    service = container.gallery_service
    album = _album(service, service.get_album(album_id))
    album["images"] = [
        _image(service, image) for image in service.list_images(album_id=album_id)
    ]
    return envelope(album)


@router.patch("/albums/{album_id}", dependencies=[Depends(require_admin)])
async def update_album(
    album_id: UUID,
    payload: AlbumPatch,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Rename or re-describe an album."""
    service = container.gallery_service
    album = service.update_album(album_id, payload.title, payload.description)
    return envelope(_album(service, album), "Album updated")


@router.delete("/albums/{album_id}", dependencies=[Depends(require_admin)])
async def delete_album(
    album_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Delete an album; its images stay in the gallery."""
    container.gallery_service.delete_album(album_id)
    return envelope(message="Album deleted")


@router.get("/albums/{album_id}/cover")
async def get_album_cover(
    album_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return the cover image, or null when the album has none."""
    service = container.gallery_service
    cover = service.get_album_cover(album_id)
    return envelope(_image(service, cover) if cover else None)


@router.put("/albums/{album_id}/cover", dependencies=[Depends(require_admin)])
async def set_album_cover(
    album_id: UUID,
    payload: CoverIn,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Make one of the album's images its cover."""
    service = container.gallery_service
    album = service.set_album_cover(album_id, payload.image_path)
    return envelope(_album(service, album), "Album cover updated")


@router.delete("/albums/{album_id}/cover", dependencies=[Depends(require_admin)])
async def clear_album_cover(
    album_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Remove the album cover."""
    service = container.gallery_service
    return envelope(_album(service, service.clear_album_cover(album_id)))


@router.post(
    "/albums/{album_id}/images",
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def upload_album_image(
    album_id: UUID,
    request: Request,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Upload an image into an album."""
    fields, upload = await read_required_file(request)
    service = container.gallery_service
    image = service.upload_image_to_album(upload, album_id, _metadata(fields))
    return envelope(_image(service, image), "Image uploaded")


@router.get("/gallery/images")
async def list_images(
    category: str | None = None,
    album_id: UUID | None = Query(default=None, alias="albumId"),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return gallery images, optionally filtered."""
    service = container.gallery_service
    images = service.list_images(category=category, album_id=album_id)
    return envelope([_image(service, image) for image in images])


@router.post("/gallery/images", status_code=201, dependencies=[Depends(require_admin)])
async def upload_image(
    request: Request, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Upload an image that is not part of an album."""
    fields, upload = await read_required_file(request)
    service = container.gallery_service
    image = service.upload_image(upload, _metadata(fields))
    return envelope(_image(service, image), "Image uploaded")


@router.post(
    "/gallery/images/import",
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def import_image(
    payload: ImageImportIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Import an image from a remote URL."""
    service = container.gallery_service
    image = await service.import_image_from_url(
        payload.url, payload.category, payload.album_id
    )
    return envelope(_image(service, image), "Image imported")


@router.get("/gallery/images/{image_id}")
async def get_image(
    image_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return one gallery image."""
    service = container.gallery_service
    return envelope(_image(service, service.get_image(image_id)))


@router.patch("/gallery/images/{image_id}", dependencies=[Depends(require_admin)])
async def update_image(
    image_id: UUID,
    payload: ImagePatch,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit image metadata."""
    service = container.gallery_service
    image = service.update_image(image_id, payload.model_dump(exclude_unset=True))
    return envelope(_image(service, image), "Image updated")


@router.delete("/gallery/images/{image_id}", dependencies=[Depends(require_admin)])
async def delete_image(
    image_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Delete an image and its stored file."""
    container.gallery_service.delete_image(image_id)
    return envelope(message="Image deleted")
