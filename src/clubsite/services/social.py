"""Likes and comments on events."""

from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from clubsite.domain.errors import (
    AuthError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from clubsite.domain.social import ANONYMOUS_AUTHOR, Comment, Like, LikeToggle
from clubsite.domain.users import Actor, UserProfile
from clubsite.services.accounts import ProfileRepository


class LikeRepository(Protocol):
    """Persistence interface for event likes."""

    def remove_like(self, event_id: UUID, user_id: UUID) -> bool:
        """Delete the (event, user) like and return True if one existed."""

    def add_like(self, event_id: UUID, user_id: UUID) -> None:
        """Insert the (event, user) like, ignoring an existing one."""

    def has_like(self, event_id: UUID, user_id: UUID) -> bool:
        """Return True when the user likes the event."""

    def list_likes(self, event_id: UUID) -> list[Like]:
        """Return likes for an event."""

    def count_likes(self, event_id: UUID) -> int:
        """Return the number of likes for an event."""


class CommentRepository(Protocol):
    """Persistence interface for event comments."""

    def create_comment(self, event_id: UUID, user_id: UUID, content: str) -> Comment:
        """Insert a comment and return it with server-assigned fields."""

    def get_comment(self, comment_id: UUID) -> Comment | None:
        """Return a comment by id, if present."""

    def list_comments(self, event_id: UUID) -> list[Comment]:
        """Return comments for an event, oldest first."""

    def delete_comment(self, comment_id: UUID) -> None:
        """Delete a comment row."""


class RoleLookup(Protocol):
    """Answers whether a user holds the administrative role."""

    def is_admin(self, user_id: UUID) -> bool:
        """Return True for administrators."""


@dataclass
class SocialService:
    """Application service for event likes and comments."""

    like_repository: LikeRepository
    comment_repository: CommentRepository
    profile_repository: ProfileRepository
    roles: RoleLookup

    def toggle_like(self, event_id: UUID, actor: Actor | None) -> LikeToggle:
        """Like the event, or unlike it when the actor already does."""
        if actor is None:
            raise AuthError("You must be logged in to like events")
        if self.like_repository.remove_like(event_id, actor.id):
            liked = False
        else:
            self.like_repository.add_like(event_id, actor.id)
            liked = True
        return LikeToggle(liked=liked, count=self.like_repository.count_likes(event_id))

    def has_user_liked(self, event_id: UUID, actor: Actor | None) -> bool:
        """Return True when the actor likes the event."""
        if actor is None:
            return False
        return self.like_repository.has_like(event_id, actor.id)

    def get_likes(self, event_id: UUID) -> tuple[list[Like], int]:
        """Return likes and their count for an event."""
        likes = self.like_repository.list_likes(event_id)
        return likes, len(likes)

    def get_like_count(self, event_id: UUID) -> int:
        """Return the like count for an event."""
        return self.like_repository.count_likes(event_id)

    def add_comment(self, event_id: UUID, actor: Actor | None, body: str) -> Comment:
        """Add a comment authored by the actor."""
        if actor is None:
            raise AuthError("You must be logged in to comment")
        content = body.strip()
        if not content:
            raise ValidationError("Comment cannot be empty")
        comment = self.comment_repository.create_comment(event_id, actor.id, content)
        profiles = self.profile_repository.get_profiles([actor.id])
        return _with_author(comment, profiles.get(actor.id))

    def list_comments(self, event_id: UUID) -> list[Comment]:
        """Return comments in reading order with author display fields."""
        comments = self.comment_repository.list_comments(event_id)
        if not comments:
            return []
        author_ids = list(dict.fromkeys(comment.user_id for comment in comments))
        profiles = self.profile_repository.get_profiles(author_ids)
        annotated = [
            _with_author(comment, profiles.get(comment.user_id)) for comment in comments
        ]
        return sorted(annotated, key=lambda comment: comment.created_at)

    def delete_comment(self, comment_id: UUID, actor: Actor | None) -> None:
        """Delete a comment owned by the actor, or any comment for admins."""
        if actor is None:
            raise AuthError("You must be logged in to delete comments")
        comment = self.comment_repository.get_comment(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if comment.user_id != actor.id and not self.roles.is_admin(actor.id):
            raise AuthorizationError("You can only delete your own comments")
        self.comment_repository.delete_comment(comment_id)


def _with_author(comment: Comment, profile: UserProfile | None) -> Comment:
    if profile is None:
        return replace(comment, author_name=ANONYMOUS_AUTHOR, author_avatar_url=None)
    return replace(
        comment,
        author_name=profile.full_name or ANONYMOUS_AUTHOR,
        author_avatar_url=profile.avatar_url,
    )
