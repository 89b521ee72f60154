"""Domain models for likes and comments on events."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

ANONYMOUS_AUTHOR = "Anonymous User"


@dataclass(frozen=True)
class Like:
    """A single user's like on an event."""

    id: UUID
    event_id: UUID
    user_id: UUID
    created_at: datetime | None


@dataclass(frozen=True)
class LikeToggle:
    """Outcome of a like toggle."""

    liked: bool
    count: int


@dataclass(frozen=True)
class Comment:
    """Comment on an event, annotated with the author's display fields."""

    id: UUID
    event_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    author_name: str = ANONYMOUS_AUTHOR
    author_avatar_url: str | None = None
