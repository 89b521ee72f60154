"""Supabase-backed contact message repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from clubsite.adapters.supabase_support import execute, first_row
from clubsite.adapters.tables import MESSAGES
from clubsite.domain.messages import Message, MessageStatus
from clubsite.services.messages import MessageRepository


@dataclass
class SupabaseMessageRepository(MessageRepository):
    """Supabase implementation for contact messages."""

    client: Client

    def create_message(self, fields: dict[str, object]) -> Message:
        """Insert a message row."""
        response = execute(
            self.client.table(MESSAGES.table).insert(MESSAGES.to_row(fields)),
            "Failed to send message",
        )
        return MESSAGES.from_row(first_row(response, "Failed to send message"))

    def get_message(self, message_id: UUID) -> Message | None:
        """Return a message by id, if present."""
        response = execute(
            self.client.table(MESSAGES.table)
            .select(MESSAGES.selection)
            .eq("id", str(message_id))
            .limit(1),
            "Failed to fetch message",
        )
        if not response.data:
            return None
        return MESSAGES.from_row(response.data[0])

    def list_messages(self, status: MessageStatus | None = None) -> list[Message]:
        """Return messages, newest first."""
        query = self.client.table(MESSAGES.table).select(MESSAGES.selection)
        if status is not None:
            query = query.eq("status", status.value)
        response = execute(
            query.order("created_at", desc=True), "Failed to fetch messages"
        )
        return [MESSAGES.from_row(row) for row in response.data or []]

    def update_status(
        self, message_id: UUID, status: MessageStatus, updated_at: datetime
    ) -> Message:
        """Overwrite the status of a message."""
        failure = "Failed to update message status"
        response = execute(
            self.client.table(MESSAGES.table)
            .update(MESSAGES.to_row({"status": status, "updated_at": updated_at}))
            .eq("id", str(message_id)),
            failure,
        )
        return MESSAGES.from_row(first_row(response, failure))

    def delete_message(self, message_id: UUID) -> None:
        """Delete a message row."""
        execute(
            self.client.table(MESSAGES.table).delete().eq("id", str(message_id)),
            "Failed to delete message",
        )

    def count_by_status(self, status: MessageStatus) -> int:
        """Return the number of messages with a status."""
        response = execute(
            self.client.table(MESSAGES.table)
            .select("id", count="exact")
            .eq("status", status.value),
            "Failed to count messages",
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])
