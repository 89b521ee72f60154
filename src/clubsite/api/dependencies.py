"""Request-scoped dependencies shared by the routers."""

from fastapi import Depends, Header, Request
from starlette.datastructures import UploadFile

from clubsite.containers import AppContainer
from clubsite.domain.errors import AuthError, AuthorizationError, ValidationError
from clubsite.domain.files import FileUpload
from clubsite.domain.users import Actor


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the app."""
    return request.app.state.container


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_actor(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> Actor | None:
    """Resolve the calling member, or None for anonymous requests."""
    return container.account_service.resolve_actor(bearer_token(authorization))


async def require_actor(actor: Actor | None = Depends(get_actor)) -> Actor:
    """Reject anonymous requests."""
    if actor is None:
        raise AuthError()
    return actor


async def require_admin(actor: Actor = Depends(require_actor)) -> Actor:
    """Reject members without the administrative role."""
    if not actor.is_admin:
        raise AuthorizationError("Admin access required")
    return actor


async def to_upload(file: UploadFile) -> FileUpload:
    """Read an uploaded form file into memory."""
    data = await file.read()
    return FileUpload(
        data=data,
        filename=file.filename or "upload",
        content_type=(file.content_type or "application/octet-stream").lower(),
    )


async def read_form(
    request: Request, file_field: str
) -> tuple[dict[str, str], FileUpload | None]:
    """Split a multipart form into text fields and one optional file."""
    form = await request.form()
    fields: dict[str, str] = {}
    upload: FileUpload | None = None
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key == file_field and value.filename:
                upload = await to_upload(value)
            continue
        fields[key] = value
    return fields, upload


async def read_required_file(
    request: Request, file_field: str = "file"
) -> tuple[dict[str, str], FileUpload]:
    """Like ``read_form`` but the file must be present."""
    fields, upload = await read_form(request, file_field)
    if upload is None:
        raise ValidationError("No file provided")
    return fields, upload
