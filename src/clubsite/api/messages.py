"""Contact form and message inbox endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from clubsite.api.dependencies import get_container, require_admin
from clubsite.api.schemas import MessageIn, MessageOut, StatusIn, envelope, serialize
from clubsite.containers import AppContainer

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", status_code=201)
async def submit_message(
    payload: MessageIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Accept a public contact-form submission."""
    container.message_service.submit_message(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        message=payload.message,
        phone=payload.phone,
    )
    return envelope(message="Thank you! Your message has been sent successfully.")


@router.get("", dependencies=[Depends(require_admin)])
async def list_messages(
    status: str | None = None, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return the inbox, newest first."""
    messages = container.message_service.list_messages(status)
    return envelope([serialize(MessageOut, message) for message in messages])


@router.get("/{message_id}", dependencies=[Depends(require_admin)])
async def open_message(
    message_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return a message, marking it read if it was unread."""
    message = container.message_service.open_message(message_id)
    return envelope(serialize(MessageOut, message))


@router.patch("/{message_id}", dependencies=[Depends(require_admin)])
async def set_message_status(
    message_id: UUID,
    payload: StatusIn,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Change a message's triage status."""
    message = container.message_service.set_message_status(message_id, payload.status)
    return envelope(serialize(MessageOut, message), "Message status updated")


@router.delete("/{message_id}", dependencies=[Depends(require_admin)])
async def delete_message(
    message_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Delete a message."""
    container.message_service.delete_message(message_id)
    return envelope(message="Message deleted")
