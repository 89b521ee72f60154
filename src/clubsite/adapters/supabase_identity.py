"""Supabase Auth implementation of the identity provider."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from supabase import Client

from clubsite.adapters.supabase_support import execute
from clubsite.adapters.tables import ADMIN_USERS
from clubsite.domain.errors import AuthError
from clubsite.domain.users import Actor, AdminUser, AuthSession
from clubsite.services.accounts import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Identity provider backed by Supabase Auth.

    Sign-up and sign-in run on a short-lived client from
    ``session_client_factory``; the shared service client keeps its service
    role headers for table access.
    """

    client: Client
    session_client_factory: Callable[[], Client]

    def sign_up(
        self, email: str, password: str, attributes: dict[str, object]
    ) -> AuthSession:
        """Register a user with metadata attributes."""
        try:
            response = self.session_client_factory().auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": dict(attributes)},
                }
            )
        except Exception as exc:
            logger.warning("Sign-up failed", extra={"email": email})
            raise AuthError(_auth_message(exc, "Sign-up failed")) from exc
        if response.user is None:
            raise AuthError("Sign-up failed")
        return _session(response.user, response.session)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Authenticate with email and password."""
        try:
            response = self.session_client_factory().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            logger.info("Sign-in rejected", extra={"email": email})
            raise AuthError("Invalid email or password") from exc
        if response.user is None or response.session is None:
            raise AuthError("Invalid email or password")
        return _session(response.user, response.session)

    def get_user(self, access_token: str) -> Actor | None:
        """Return the user behind an access token, or None when it is invalid."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            logger.info("Rejected access token", exc_info=True)
            return None
        if response is None or response.user is None:
            return None
        return Actor(id=UUID(str(response.user.id)), email=response.user.email)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session of an access token."""
        try:
            self.client.auth.admin.sign_out(access_token)
        except Exception as exc:
            raise AuthError(_auth_message(exc, "Sign-out failed")) from exc

    def update_user(self, user_id: UUID, attributes: dict[str, object]) -> None:
        """Merge attributes into the user's metadata."""
        try:
            self.client.auth.admin.update_user_by_id(
                str(user_id), {"user_metadata": dict(attributes)}
            )
        except Exception as exc:
            logger.error(
                "Failed to update user metadata",
                exc_info=True,
                extra={"user_id": str(user_id)},
            )
            raise AuthError(_auth_message(exc, "Failed to update user")) from exc

    def is_admin(self, user_id: UUID) -> bool:
        """Return True when the user is listed in ``admin_users``."""
        response = execute(
            self.client.table(ADMIN_USERS.table)
            .select("id")
            .eq("id", str(user_id))
            .limit(1),
            "Failed to check admin role",
        )
        return bool(response.data)

    def list_admins(self) -> list[AdminUser]:
        """Return every admin row, oldest grant first."""
        response = execute(
            self.client.table(ADMIN_USERS.table)
            .select(ADMIN_USERS.selection)
            .order("created_at"),
            "Failed to load admin users",
        )
        return [ADMIN_USERS.from_row(row) for row in response.data or []]

    def remove_admin(self, user_id: UUID) -> bool:
        """Delete an admin row and report whether one was removed."""
        response = execute(
            self.client.table(ADMIN_USERS.table).delete().eq("id", str(user_id)),
            "Failed to remove admin user",
        )
        return bool(response.data)


def _session(user: Any, session: Any) -> AuthSession:
    # Sessions are absent until the email address is confirmed.
    expires_at = getattr(session, "expires_at", None)
    return AuthSession(
        user_id=UUID(str(user.id)),
        email=user.email,
        access_token=getattr(session, "access_token", "") or "",
        refresh_token=getattr(session, "refresh_token", "") or "",
        expires_at=datetime.fromtimestamp(expires_at, tz=UTC) if expires_at else None,
    )


def _auth_message(exc: Exception, fallback: str) -> str:
    message = getattr(exc, "message", None)
    return message if isinstance(message, str) and message else fallback
