"""Supabase-backed result repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from clubsite.adapters.supabase_support import execute, first_row
from clubsite.adapters.tables import RESULT_ITEMS, RESULTS
from clubsite.domain.content import Result, ResultItem
from clubsite.services.results import ResultRepository


@dataclass
class SupabaseResultRepository(ResultRepository):
    """Supabase implementation for results and their items."""

    client: Client

    def list_results(self, category: str | None = None) -> list[Result]:
        """Return results, newest first."""
        query = self.client.table(RESULTS.table).select(RESULTS.selection)
        if category:
            query = query.eq("category", category)
        response = execute(
            query.order("created_at", desc=True), "Failed to fetch results"
        )
        return [RESULTS.from_row(row) for row in response.data or []]

    def get_result(self, result_id: UUID) -> Result | None:
        """Return a result by id, if present."""
        response = execute(
            self.client.table(RESULTS.table)
            .select(RESULTS.selection)
            .eq("id", str(result_id))
            .limit(1),
            "Failed to fetch result",
        )
        if not response.data:
            return None
        return RESULTS.from_row(response.data[0])

    def create_result(self, fields: dict[str, object]) -> Result:
        """Insert a result row."""
        response = execute(
            self.client.table(RESULTS.table).insert(RESULTS.to_row(fields)),
            "Failed to create result",
        )
        return RESULTS.from_row(first_row(response, "Failed to create result"))

    def update_result(self, result_id: UUID, fields: dict[str, object]) -> Result:
        """Update a result row."""
        response = execute(
            self.client.table(RESULTS.table)
            .update(RESULTS.to_row(fields))
            .eq("id", str(result_id)),
            "Failed to update result",
        )
        return RESULTS.from_row(first_row(response, "Failed to update result"))

    def delete_result(self, result_id: UUID) -> None:
        """Delete a result row."""
        execute(
            self.client.table(RESULTS.table).delete().eq("id", str(result_id)),
            "Failed to delete result",
        )

    def list_items(self, result_ids: list[UUID]) -> list[ResultItem]:
        """Return items of the given results, oldest first."""
        if not result_ids:
            return []
        response = execute(
            self.client.table(RESULT_ITEMS.table)
            .select(RESULT_ITEMS.selection)
            .in_("result_id", [str(result_id) for result_id in result_ids])
            .order("created_at", desc=False),
            "Failed to fetch result items",
        )
        return [RESULT_ITEMS.from_row(row) for row in response.data or []]

    def create_items(self, result_id: UUID, items: list[dict[str, str]]) -> None:
        """Insert items for a result in one request."""
        rows = [
            RESULT_ITEMS.to_row({"result_id": result_id, **item}) for item in items
        ]
        execute(
            self.client.table(RESULT_ITEMS.table).insert(rows),
            "Failed to create result items",
        )

    def delete_items(self, result_id: UUID) -> None:
        """Delete every item of a result."""
        execute(
            self.client.table(RESULT_ITEMS.table)
            .delete()
            .eq("result_id", str(result_id)),
            "Failed to delete result items",
        )
