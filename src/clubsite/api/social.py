"""Event like and comment endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from clubsite.api.dependencies import get_actor, get_container, require_actor
from clubsite.api.schemas import (
    CommentIn,
    CommentOut,
    LikeOut,
    LikeToggleOut,
    envelope,
    serialize,
)
from clubsite.containers import AppContainer
from clubsite.domain.users import Actor

router = APIRouter(tags=["social"])


@router.get("/events/{event_id}/likes")
async def get_likes(
    event_id: UUID,
    actor: Actor | None = Depends(get_actor),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return likes for an event and whether the caller likes it."""
    service = container.social_service
    likes, count = service.get_likes(event_id)
    return envelope(
        {
            "count": count,
            "likedByMe": service.has_user_liked(event_id, actor),
            "likes": [serialize(LikeOut, like) for like in likes],
        }
    )


@router.post("/events/{event_id}/likes/toggle")
async def toggle_like(
    event_id: UUID,
    actor: Actor = Depends(require_actor),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Like or unlike an event."""
    toggle = container.social_service.toggle_like(event_id, actor)
    return envelope(serialize(LikeToggleOut, toggle))


@router.get("/events/{event_id}/comments")
async def list_comments(
    event_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return an event's comments, oldest first."""
    comments = container.social_service.list_comments(event_id)
    return envelope([serialize(CommentOut, comment) for comment in comments])


@router.post("/events/{event_id}/comments", status_code=201)
async def add_comment(
    event_id: UUID,
    payload: CommentIn,
    actor: Actor = Depends(require_actor),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Comment on an event."""
    comment = container.social_service.add_comment(event_id, actor, payload.content)
    return envelope(serialize(CommentOut, comment), "Comment added")


@router.delete("/comments/{comment_id}")
async def delete_comment(
    comment_id: UUID,
    actor: Actor = Depends(require_actor),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Delete one of the caller's comments, or any comment for admins."""
    container.social_service.delete_comment(comment_id, actor)
    return envelope(message="Comment deleted")
