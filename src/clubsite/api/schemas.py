"""Pydantic request and response models for the JSON API.

Field names are snake_case in Python and camelCase on the wire.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

M = TypeVar("M", bound="ApiModel")


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def envelope(
    data: Any = None, message: str | None = None, success: bool = True
) -> dict[str, Any]:
    """Wrap a payload in the uniform response envelope."""
    return {"success": success, "message": message, "data": data}


def serialize(model: type[M], value: Any, **extra: Any) -> dict[str, Any]:
    """Dump a domain dataclass through a response model."""
    return model.model_validate({**asdict(value), **extra}).model_dump(
        by_alias=True, mode="json"
    )


def form_fields(model: type[M], fields: dict[str, str]) -> dict[str, object]:
    """Validate form fields and return only those the caller sent."""
    return model.model_validate(fields).model_dump(exclude_unset=True)


# Responses


class AlbumOut(ApiModel):
    id: UUID
    title: str
    description: str | None = None
    cover_image_path: str | None = None
    cover_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GalleryImageOut(ApiModel):
    id: UUID
    title: str
    alt: str
    description: str
    category: str | None = None
    album_id: UUID | None = None
    storage_path: str
    url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LikeOut(ApiModel):
    id: UUID
    event_id: UUID
    user_id: UUID
    created_at: datetime | None = None


class LikeToggleOut(ApiModel):
    liked: bool
    count: int


class CommentOut(ApiModel):
    id: UUID
    event_id: UUID
    user_id: UUID
    content: str
    created_at: datetime | None = None
    author_name: str
    author_avatar_url: str | None = None


class MessageOut(ApiModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    message: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EventOut(ApiModel):
    id: UUID
    title: str
    date: str
    time: str
    location: str
    description: str
    category: str
    image_path: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompetitionOut(ApiModel):
    id: UUID
    title: str
    date: str
    format: str
    entry_deadline: str
    description: str
    status: str
    winner: str | None = None
    image_path: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DocumentOut(ApiModel):
    id: UUID
    title: str
    description: str
    filetype: str
    filesize: str
    category: str
    file_path: str | None = None
    file_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ResultItemOut(ApiModel):
    id: UUID
    result_id: UUID
    position: str
    name: str
    created_at: datetime | None = None


class ResultOut(ApiModel):
    id: UUID
    title: str
    date: str
    category: str
    items: list[ResultItemOut]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class JokerDrawOut(ApiModel):
    last_winner: str
    last_win_amount: float
    current_jackpot: float
    winner_image_path: str | None = None
    winner_image_url: str | None = None
    updated_at: datetime | None = None


class JokerDrawEntryOut(ApiModel):
    id: int
    last_winner: str
    last_win_amount: float
    current_jackpot: float
    winner_image_path: str | None = None
    recorded_at: datetime | None = None


class ProfileOut(ApiModel):
    id: UUID
    email: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    is_admin: bool = False


class AdminUserOut(ApiModel):
    id: UUID
    created_at: datetime | None = None


class SessionOut(ApiModel):
    user_id: UUID
    email: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: datetime | None = None


# Requests


class AlbumIn(ApiModel):
    title: str
    description: str | None = None


class AlbumPatch(ApiModel):
    title: str | None = None
    description: str | None = None


class CoverIn(ApiModel):
    image_path: str


class ImageForm(ApiModel):
    title: str = ""
    alt: str = ""
    description: str = ""
    category: str | None = None


class ImagePatch(ApiModel):
    """Editable image metadata.

    ``storage_path`` is accepted only so that attempts to change it are
    rejected with a clear error.
    """

    title: str | None = None
    alt: str | None = None
    description: str | None = None
    category: str | None = None
    album_id: UUID | None = None
    storage_path: str | None = None


class ImageImportIn(ApiModel):
    url: str
    category: str | None = None
    album_id: UUID | None = None


class CommentIn(ApiModel):
    content: str


class MessageIn(ApiModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str | None = None
    message: str = ""


class StatusIn(ApiModel):
    status: str


class EventForm(ApiModel):
    title: str | None = None
    date: str | None = None
    time: str | None = None
    location: str | None = None
    description: str | None = None
    category: str | None = None


class CompetitionForm(ApiModel):
    title: str | None = None
    date: str | None = None
    format: str | None = None
    entry_deadline: str | None = None
    description: str | None = None
    status: str | None = None
    winner: str | None = None


class DocumentForm(ApiModel):
    title: str | None = None
    description: str | None = None
    filetype: str | None = None
    filesize: str | None = None
    category: str | None = None


class ResultItemIn(ApiModel):
    position: str
    name: str


class ResultIn(ApiModel):
    title: str | None = None
    date: str | None = None
    category: str | None = None
    items: list[ResultItemIn] | None = None


class JokerDrawIn(ApiModel):
    model_config = ConfigDict(allow_inf_nan=False)

    last_winner: str
    last_win_amount: float
    current_jackpot: float
    winner_image_path: str | None = None


class SignUpIn(ApiModel):
    email: str
    password: str
    full_name: str


class SignInIn(ApiModel):
    email: str
    password: str


class ProfilePatch(ApiModel):
    full_name: str


class BucketIn(ApiModel):
    name: str
