"""Contact-form messages and their triage status."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from clubsite.domain.errors import NotFoundError, ValidationError
from clubsite.domain.messages import Message, MessageStatus
from clubsite.domain.validation import is_valid_email

logger = logging.getLogger(__name__)


class MessageRepository(Protocol):
    """Persistence interface for contact messages."""

    def create_message(self, fields: dict[str, object]) -> Message:
        """Insert a message row and return it."""

    def get_message(self, message_id: UUID) -> Message | None:
        """Return a message by id, if present."""

    def list_messages(self, status: MessageStatus | None = None) -> list[Message]:
        """Return messages, newest first, optionally by status."""

    def update_status(
        self, message_id: UUID, status: MessageStatus, updated_at: datetime
    ) -> Message:
        """Overwrite the status and modification time of a message."""

    def delete_message(self, message_id: UUID) -> None:
        """Delete a message row."""

    def count_by_status(self, status: MessageStatus) -> int:
        """Return the number of messages with a status."""


@dataclass
class MessageService:
    """Application service for contact messages.

    Status is a free-transition label: any status can be set from any other.
    The only automatic transition is ``unread`` to ``read`` when an
    administrator opens a message.
    """

    repository: MessageRepository

    def submit_message(  # noqa: PLR0913
        self,
        first_name: str,
        last_name: str,
        email: str,
        message: str,
        phone: str | None = None,
    ) -> Message:
        """Store a public contact-form submission as unread."""
        fields = {
            "first_name": (first_name or "").strip(),
            "last_name": (last_name or "").strip(),
            "email": (email or "").strip(),
            "message": (message or "").strip(),
        }
        if not all(fields.values()):
            raise ValidationError("Please fill in all required fields.")
        if not is_valid_email(fields["email"]):
            raise ValidationError("Please enter a valid email address.")
        created = self.repository.create_message(
            {
                **fields,
                "phone": (phone or "").strip() or None,
                "status": MessageStatus.UNREAD,
            }
        )
        logger.info("Received contact message", extra={"message_id": str(created.id)})
        return created

    def list_messages(self, status: str | None = None) -> list[Message]:
        """Return messages for the admin inbox."""
        return self.repository.list_messages(
            _parse_status(status) if status else None
        )

    def get_message(self, message_id: UUID) -> Message:
        """Return a message without changing its status."""
        message = self.repository.get_message(message_id)
        if message is None:
            raise NotFoundError("Message not found")
        return message

    def open_message(self, message_id: UUID) -> Message:
        """Return a message, marking it read the first time it is opened."""
        message = self.get_message(message_id)
        if message.status == MessageStatus.UNREAD:
            return self.repository.update_status(
                message_id, MessageStatus.READ, datetime.now(tz=UTC)
            )
        return message

    def set_message_status(self, message_id: UUID, status: str) -> Message:
        """Overwrite the triage status."""
        new_status = _parse_status(status)
        self.get_message(message_id)
        return self.repository.update_status(
            message_id, new_status, datetime.now(tz=UTC)
        )

    def delete_message(self, message_id: UUID) -> None:
        """Permanently delete a message."""
        self.get_message(message_id)
        self.repository.delete_message(message_id)

    def count_unread(self) -> int:
        """Return the number of unread messages."""
        return self.repository.count_by_status(MessageStatus.UNREAD)


def _parse_status(value: str) -> MessageStatus:
    try:
        return MessageStatus(value)
    except ValueError as exc:
        allowed = ", ".join(status.value for status in MessageStatus)
        raise ValidationError(f"Status must be one of: {allowed}") from exc
