"""Domain models for accounts and the acting user."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Actor:
    """The authenticated user behind a request."""

    id: UUID
    email: str | None
    is_admin: bool = False


@dataclass(frozen=True)
class UserProfile:
    """Public profile row used for display names and avatars."""

    id: UUID
    email: str | None
    full_name: str | None
    avatar_url: str | None


@dataclass(frozen=True)
class AuthSession:
    """Tokens returned by a successful sign-in."""

    user_id: UUID
    email: str | None
    access_token: str | None
    refresh_token: str | None
    expires_at: datetime | None = None


@dataclass(frozen=True)
class AdminUser:
    """A row of ``admin_users``: a user holding the administrative role."""

    id: UUID
    created_at: datetime | None = None
