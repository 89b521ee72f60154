"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from clubsite.adapters.supabase_support import execute, first_row
from clubsite.adapters.tables import USERS
from clubsite.domain.users import UserProfile
from clubsite.services.accounts import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the public ``users`` table."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""
        response = execute(
            self.client.table(USERS.table)
            .select(USERS.selection)
            .eq("id", str(user_id))
            .limit(1),
            "Failed to fetch user profile",
        )
        if not response.data:
            return None
        return USERS.from_row(response.data[0])

    def get_profiles(self, user_ids: list[UUID]) -> dict[UUID, UserProfile]:
        """Return profiles keyed by id."""
        if not user_ids:
            return {}
        unique_ids = sorted({str(user_id) for user_id in user_ids})
        response = execute(
            self.client.table(USERS.table)
            .select(USERS.selection)
            .in_("id", unique_ids),
            "Failed to fetch user profiles",
        )
        profiles = [USERS.from_row(row) for row in response.data or []]
        return {profile.id: profile for profile in profiles}

    def create_profile(
        self, user_id: UUID, email: str | None, full_name: str | None
    ) -> UserProfile:
        """Insert a profile row."""
        response = execute(
            self.client.table(USERS.table).insert(
                USERS.to_row({"id": user_id, "email": email, "full_name": full_name})
            ),
            "Failed to create user profile",
        )
        return USERS.from_row(first_row(response, "Failed to create user profile"))

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserProfile:
        """Update a profile row."""
        response = execute(
            self.client.table(USERS.table)
            .update(USERS.to_row(fields))
            .eq("id", str(user_id)),
            "Failed to update user profile",
        )
        return USERS.from_row(first_row(response, "Failed to update user profile"))
