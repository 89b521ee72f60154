"""Generic Supabase repository for single-table content types."""

from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID

from supabase import Client

from clubsite.adapters.supabase_support import execute, first_row
from clubsite.adapters.tables import ColumnMap
from clubsite.services.content import RecordRepository

T = TypeVar("T")


@dataclass
class SupabaseRecordRepository(RecordRepository[T]):
    """Supabase implementation of table-scoped CRUD."""

    client: Client
    columns: ColumnMap[T]

    def list_records(
        self,
        filters: dict[str, object] | None = None,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> list[T]:
        """Return rows matching equality filters in the given order."""
        query = self.client.table(self.columns.table).select(self.columns.selection)
        for column, value in self.columns.to_row(filters or {}).items():
            query = query.eq(column, value)
        query = query.order(self.columns.column_name(order_by), desc=descending)
        response = execute(query, f"Failed to fetch {self.columns.table}")
        return [self.columns.from_row(row) for row in response.data or []]

    def get_record(self, record_id: UUID) -> T | None:
        """Return a row by id, if present."""
        response = execute(
            self.client.table(self.columns.table)
            .select(self.columns.selection)
            .eq("id", str(record_id))
            .limit(1),
            f"Failed to fetch {self.columns.table} row",
        )
        if not response.data:
            return None
        return self.columns.from_row(response.data[0])

    def create_record(self, fields: dict[str, object]) -> T:
        """Insert a row and return it."""
        failure = f"Failed to create {self.columns.table} row"
        response = execute(
            self.client.table(self.columns.table).insert(self.columns.to_row(fields)),
            failure,
        )
        return self.columns.from_row(first_row(response, failure))

    def update_record(self, record_id: UUID, fields: dict[str, object]) -> T:
        """Update a row and return it."""
        failure = f"Failed to update {self.columns.table} row"
        response = execute(
            self.client.table(self.columns.table)
            .update(self.columns.to_row(fields))
            .eq("id", str(record_id)),
            failure,
        )
        return self.columns.from_row(first_row(response, failure))

    def delete_record(self, record_id: UUID) -> None:
        """Delete a row."""
        execute(
            self.client.table(self.columns.table).delete().eq("id", str(record_id)),
            f"Failed to delete {self.columns.table} row",
        )
