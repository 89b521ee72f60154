"""Declarative table mappings between domain models and Supabase rows.

Every adapter reads and writes rows through one of the ``ColumnMap``
instances below, so column naming and value conversion live in one place.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID

from clubsite.domain.content import (
    Competition,
    CompetitionStatus,
    Document,
    Event,
    JokerDrawEntry,
    JokerDrawState,
    Result,
    ResultItem,
)
from clubsite.domain.gallery import Album, GalleryImage
from clubsite.domain.messages import Message, MessageStatus
from clubsite.domain.social import Comment, Like
from clubsite.domain.users import AdminUser, UserProfile

T = TypeVar("T")


def as_uuid(value: Any) -> UUID | None:
    """Decode a UUID column, keeping nulls."""
    if value is None or isinstance(value, UUID):
        return value
    return UUID(str(value))


def as_datetime(value: Any) -> datetime | None:
    """Decode an ISO-8601 timestamp column, keeping nulls."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def as_text(value: Any) -> str:
    """Decode a text column, mapping null to an empty string."""
    return "" if value is None else str(value)


def as_float(value: Any) -> float:
    """Decode a numeric column."""
    return float(value or 0)


def encode_value(value: Any) -> Any:
    """Encode a Python value for the PostgREST JSON payload."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(frozen=True)
class Column:
    """One attribute-to-column mapping with optional decoding."""

    attribute: str
    name: str = ""
    decode: Callable[[Any], Any] | None = None

    @property
    def column(self) -> str:
        """Return the column name in the table."""
        return self.name or self.attribute


@dataclass(frozen=True)
class ColumnMap(Generic[T]):
    """Mapping between a domain model and the rows of one table."""

    table: str
    model: Callable[..., T]
    columns: tuple[Column, ...]

    @property
    def selection(self) -> str:
        """Return the column list for select queries."""
        return ", ".join(column.column for column in self.columns)

    def column_name(self, attribute: str) -> str:
        """Return the column for a domain attribute."""
        for column in self.columns:
            if column.attribute == attribute:
                return column.column
        raise KeyError(f"{self.table} has no column for {attribute!r}")

    def to_row(self, fields: dict[str, object]) -> dict[str, object]:
        """Translate domain attributes into a row payload."""
        return {
            self.column_name(attribute): encode_value(value)
            for attribute, value in fields.items()
        }

    def from_row(self, row: dict[str, Any]) -> T:
        """Build a domain model from a row, skipping absent columns."""
        values: dict[str, Any] = {}
        for column in self.columns:
            if column.column not in row:
                continue
            raw = row[column.column]
            values[column.attribute] = column.decode(raw) if column.decode else raw
        return self.model(**values)


def _timestamps() -> tuple[Column, ...]:
    return (
        Column("created_at", decode=as_datetime),
        Column("updated_at", decode=as_datetime),
    )


ALBUMS = ColumnMap(
    table="albums",
    model=Album,
    columns=(
        Column("id", decode=as_uuid),
        Column("title", decode=as_text),
        Column("description"),
        Column("cover_image_path"),
        *_timestamps(),
    ),
)

GALLERY_IMAGES = ColumnMap(
    table="gallery_images",
    model=GalleryImage,
    columns=(
        Column("id", decode=as_uuid),
        Column("title", decode=as_text),
        Column("alt", decode=as_text),
        Column("description", decode=as_text),
        Column("category"),
        Column("album_id", decode=as_uuid),
        Column("storage_path", decode=as_text),
        *_timestamps(),
    ),
)

EVENT_LIKES = ColumnMap(
    table="event_likes",
    model=Like,
    columns=(
        Column("id", decode=as_uuid),
        Column("event_id", decode=as_uuid),
        Column("user_id", decode=as_uuid),
        Column("created_at", decode=as_datetime),
    ),
)

EVENT_COMMENTS = ColumnMap(
    table="event_comments",
    model=Comment,
    columns=(
        Column("id", decode=as_uuid),
        Column("event_id", decode=as_uuid),
        Column("user_id", decode=as_uuid),
        Column("content", decode=as_text),
        Column("created_at", decode=as_datetime),
    ),
)

MESSAGES = ColumnMap(
    table="messages",
    model=Message,
    columns=(
        Column("id", decode=as_uuid),
        Column("first_name", decode=as_text),
        Column("last_name", decode=as_text),
        Column("email", decode=as_text),
        Column("phone"),
        Column("message", decode=as_text),
        Column("status", decode=MessageStatus),
        *_timestamps(),
    ),
)

EVENTS = ColumnMap(
    table="events",
    model=Event,
    columns=(
        Column("id", decode=as_uuid),
        Column("title", decode=as_text),
        Column("date", decode=as_text),
        Column("time", decode=as_text),
        Column("location", decode=as_text),
        Column("description", decode=as_text),
        Column("category", decode=as_text),
        Column("image_path"),
        *_timestamps(),
    ),
)

COMPETITIONS = ColumnMap(
    table="competitions",
    model=Competition,
    columns=(
        Column("id", decode=as_uuid),
        Column("title", decode=as_text),
        Column("date", decode=as_text),
        Column("format", decode=as_text),
        Column("entry_deadline", decode=as_text),
        Column("description", decode=as_text),
        Column("status", decode=CompetitionStatus),
        Column("winner"),
        Column("image_path"),
        *_timestamps(),
    ),
)

DOCUMENTS = ColumnMap(
    table="documents",
    model=Document,
    columns=(
        Column("id", decode=as_uuid),
        Column("title", decode=as_text),
        Column("description", decode=as_text),
        Column("filetype", decode=as_text),
        Column("filesize", decode=as_text),
        Column("category", decode=as_text),
        Column("file_path"),
        *_timestamps(),
    ),
)

RESULTS = ColumnMap(
    table="results",
    model=Result,
    columns=(
        Column("id", decode=as_uuid),
        Column("title", decode=as_text),
        Column("date", decode=as_text),
        Column("category", decode=as_text),
        *_timestamps(),
    ),
)

RESULT_ITEMS = ColumnMap(
    table="result_items",
    model=ResultItem,
    columns=(
        Column("id", decode=as_uuid),
        Column("result_id", decode=as_uuid),
        Column("position", decode=as_text),
        Column("name", decode=as_text),
        Column("created_at", decode=as_datetime),
    ),
)

JOKER_DRAW = ColumnMap(
    table="joker_draw",
    model=JokerDrawState,
    columns=(
        Column("last_winner", decode=as_text),
        Column("last_win_amount", decode=as_float),
        Column("current_jackpot", decode=as_float),
        Column("winner_image_path"),
        Column("updated_at", decode=as_datetime),
    ),
)

JOKER_DRAW_HISTORY = ColumnMap(
    table="joker_draw_history",
    model=JokerDrawEntry,
    columns=(
        Column("id", decode=int),
        Column("last_winner", decode=as_text),
        Column("last_win_amount", decode=as_float),
        Column("current_jackpot", decode=as_float),
        Column("winner_image_path"),
        Column("recorded_at", decode=as_datetime),
    ),
)

USERS = ColumnMap(
    table="users",
    model=UserProfile,
    columns=(
        Column("id", decode=as_uuid),
        Column("email"),
        Column("full_name"),
        Column("avatar_url"),
    ),
)

ADMIN_USERS = ColumnMap(
    table="admin_users",
    model=AdminUser,
    columns=(
        Column("id", decode=as_uuid),
        Column("created_at", decode=as_datetime),
    ),
)
