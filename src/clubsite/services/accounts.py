"""Member accounts, profiles and request actor resolution."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from clubsite.domain.errors import AuthError, NotFoundError, ValidationError
from clubsite.domain.files import FileUpload
from clubsite.domain.users import Actor, AdminUser, AuthSession, UserProfile
from clubsite.domain.validation import is_valid_email, require_text
from clubsite.services.storage import (
    DEFAULT_MAX_UPLOAD_BYTES,
    ObjectStorage,
    validate_image_upload,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class IdentityProvider(Protocol):
    """Hosted authentication provider."""

    def sign_up(
        self, email: str, password: str, attributes: dict[str, object]
    ) -> AuthSession:
        """Register a user. Tokens are empty until the email is confirmed."""

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Authenticate with email and password."""

    def get_user(self, access_token: str) -> Actor | None:
        """Return the user owning an access token, if it is valid."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""

    def update_user(self, user_id: UUID, attributes: dict[str, object]) -> None:
        """Merge attributes into the user's metadata."""

    def is_admin(self, user_id: UUID) -> bool:
        """Return True when the user holds the administrative role."""

    def list_admins(self) -> list[AdminUser]:
        """Return the users holding the administrative role."""

    def remove_admin(self, user_id: UUID) -> bool:
        """Revoke the administrative role; False when the user did not hold it."""


class ProfileRepository(Protocol):
    """Persistence interface for public user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return a profile by user id, if present."""

    def get_profiles(self, user_ids: list[UUID]) -> dict[UUID, UserProfile]:
        """Return profiles keyed by user id for the ids that exist."""

    def create_profile(
        self, user_id: UUID, email: str | None, full_name: str | None
    ) -> UserProfile:
        """Insert a profile row and return it."""

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserProfile:
        """Update a profile row and return it."""


@dataclass
class AccountService:
    """Application service for member accounts."""

    identity: IdentityProvider
    profile_repository: ProfileRepository
    storage: ObjectStorage
    bucket: str = "profiles"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    def sign_up(self, email: str, password: str, full_name: str) -> AuthSession:
        """Register a member and make sure a profile row exists."""
        email = email.strip()
        if not is_valid_email(email):
            raise ValidationError("Please enter a valid email address.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        name = require_text(full_name, "Full name")
        session = self.identity.sign_up(email, password, {"full_name": name})
        self.ensure_profile(session.user_id, email, name)
        return session

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Authenticate a member."""
        if not email.strip() or not password:
            raise ValidationError("Email and password are required")
        return self.identity.sign_in_with_password(email.strip(), password)

    def sign_out(self, access_token: str) -> None:
        """End the member's session."""
        self.identity.sign_out(access_token)

    def resolve_actor(self, access_token: str | None) -> Actor | None:
        """Return the actor for a bearer token, or None for anonymous callers."""
        if not access_token:
            return None
        user = self.identity.get_user(access_token)
        if user is None:
            return None
        return replace(user, is_admin=self.identity.is_admin(user.id))

    def ensure_profile(
        self, user_id: UUID, email: str | None, full_name: str | None
    ) -> UserProfile:
        """Return the existing profile or create it."""
        existing = self.profile_repository.get_profile(user_id)
        if existing:
            return existing
        return self.profile_repository.create_profile(user_id, email, full_name)

    def get_profile(self, actor: Actor | None) -> UserProfile:
        """Return the actor's profile."""
        if actor is None:
            raise AuthError()
        profile = self.profile_repository.get_profile(actor.id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def update_profile(self, actor: Actor | None, full_name: str) -> UserProfile:
        """Change the actor's display name."""
        if actor is None:
            raise AuthError()
        name = require_text(full_name, "Full name")
        self.identity.update_user(actor.id, {"full_name": name})
        self.ensure_profile(actor.id, actor.email, name)
        return self.profile_repository.update_profile(actor.id, {"full_name": name})

    def upload_avatar(self, actor: Actor | None, upload: FileUpload) -> str:
        """Store a new avatar for the actor and return its public URL."""
        if actor is None:
            raise AuthError()
        validate_image_upload(upload, self.max_upload_bytes)
        path = f"{actor.id}/avatar.{upload.extension}"
        self.storage.upload(
            self.bucket, path, upload.data, upload.content_type, upsert=True
        )
        url = self.storage.get_public_url(self.bucket, path)
        self.identity.update_user(actor.id, {"avatar_url": url})
        self.ensure_profile(actor.id, actor.email, None)
        self.profile_repository.update_profile(actor.id, {"avatar_url": url})
        logger.info("Updated avatar", extra={"user_id": str(actor.id)})
        return url

    def list_admins(self) -> list[AdminUser]:
        """Return every user holding the administrative role."""
        return self.identity.list_admins()

    def remove_admin(self, actor: Actor, user_id: UUID) -> None:
        """Revoke another user's administrative role."""
        if actor.id == user_id:
            raise ValidationError("You cannot remove your own admin access")
        if not self.identity.remove_admin(user_id):
            raise NotFoundError("Admin user not found")
        logger.info(
            "Removed admin access",
            extra={"user_id": str(user_id), "removed_by": str(actor.id)},
        )
