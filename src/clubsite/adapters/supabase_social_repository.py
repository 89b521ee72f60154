"""Supabase-backed like and comment repositories."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from clubsite.adapters.supabase_support import execute, first_row
from clubsite.adapters.tables import EVENT_COMMENTS, EVENT_LIKES
from clubsite.domain.social import Comment, Like
from clubsite.services.social import CommentRepository, LikeRepository


@dataclass
class SupabaseLikeRepository(LikeRepository):
    """Supabase implementation for event likes.

    The ``event_likes`` table carries a unique key on ``(event_id, user_id)``,
    so adding a like that already exists is a no-op rather than a duplicate.
    """

    client: Client

    def remove_like(self, event_id: UUID, user_id: UUID) -> bool:
        """Delete the like and report whether a row was removed."""
        response = execute(
            self.client.table(EVENT_LIKES.table)
            .delete()
            .eq("event_id", str(event_id))
            .eq("user_id", str(user_id)),
            "Failed to unlike event",
        )
        return bool(response.data)

    def add_like(self, event_id: UUID, user_id: UUID) -> None:
        """Insert the like unless it already exists."""
        execute(
            self.client.table(EVENT_LIKES.table).upsert(
                EVENT_LIKES.to_row({"event_id": event_id, "user_id": user_id}),
                on_conflict="event_id,user_id",
                ignore_duplicates=True,
            ),
            "Failed to like event",
        )

    def has_like(self, event_id: UUID, user_id: UUID) -> bool:
        """Return True when the like exists."""
        response = execute(
            self.client.table(EVENT_LIKES.table)
            .select("id")
            .eq("event_id", str(event_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "Failed to check existing like",
        )
        return bool(response.data)

    def list_likes(self, event_id: UUID) -> list[Like]:
        """Return likes for an event."""
        response = execute(
            self.client.table(EVENT_LIKES.table)
            .select(EVENT_LIKES.selection)
            .eq("event_id", str(event_id)),
            "Failed to fetch likes",
        )
        return [EVENT_LIKES.from_row(row) for row in response.data or []]

    def count_likes(self, event_id: UUID) -> int:
        """Return the number of likes for an event."""
        response = execute(
            self.client.table(EVENT_LIKES.table)
            .select("id", count="exact")
            .eq("event_id", str(event_id)),
            "Failed to count likes",
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])


@dataclass
class SupabaseCommentRepository(CommentRepository):
    """Supabase implementation for event comments."""

    client: Client

    def create_comment(self, event_id: UUID, user_id: UUID, content: str) -> Comment:
        """Insert a comment row."""
        response = execute(
            self.client.table(EVENT_COMMENTS.table).insert(
                EVENT_COMMENTS.to_row(
                    {"event_id": event_id, "user_id": user_id, "content": content}
                )
            ),
            "Failed to add comment",
        )
        return EVENT_COMMENTS.from_row(first_row(response, "Failed to add comment"))

    def get_comment(self, comment_id: UUID) -> Comment | None:
        """Return a comment by id, if present."""
        response = execute(
            self.client.table(EVENT_COMMENTS.table)
            .select(EVENT_COMMENTS.selection)
            .eq("id", str(comment_id))
            .limit(1),
            "Failed to fetch comment",
        )
        if not response.data:
            return None
        return EVENT_COMMENTS.from_row(response.data[0])

    def list_comments(self, event_id: UUID) -> list[Comment]:
        """Return comments for an event, oldest first."""
        response = execute(
            self.client.table(EVENT_COMMENTS.table)
            .select(EVENT_COMMENTS.selection)
            .eq("event_id", str(event_id))
            .order("created_at", desc=False),
            "Failed to fetch comments",
        )
        return [EVENT_COMMENTS.from_row(row) for row in response.data or []]

    def delete_comment(self, comment_id: UUID) -> None:
        """Delete a comment row."""
        execute(
            self.client.table(EVENT_COMMENTS.table)
            .delete()
            .eq("id", str(comment_id)),
            "Failed to delete comment",
        )
