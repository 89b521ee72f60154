"""Domain models for contact-form messages."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class MessageStatus(StrEnum):
    """Triage label for an inbound message."""

    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"


@dataclass(frozen=True)
class Message:
    """Contact-form submission."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None
    message: str
    status: MessageStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
