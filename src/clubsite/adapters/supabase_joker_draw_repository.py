"""Supabase-backed joker draw repository.

The current state lives in a single row of ``joker_draw`` keyed by
``CURRENT_ROW_ID``; every update is also appended to ``joker_draw_history``.
"""

from dataclasses import asdict, dataclass

from supabase import Client

from clubsite.adapters.supabase_support import execute, first_row
from clubsite.adapters.tables import JOKER_DRAW, JOKER_DRAW_HISTORY
from clubsite.domain.content import JokerDrawEntry, JokerDrawState
from clubsite.services.joker_draw import JokerDrawRepository

CURRENT_ROW_ID = 1


@dataclass
class SupabaseJokerDrawRepository(JokerDrawRepository):
    """Supabase implementation for the joker draw."""

    client: Client

    def get_current(self) -> JokerDrawState | None:
        """Return the current state row, if present."""
        response = execute(
            self.client.table(JOKER_DRAW.table)
            .select(JOKER_DRAW.selection)
            .eq("id", CURRENT_ROW_ID)
            .limit(1),
            "Failed to fetch joker draw data",
        )
        if not response.data:
            return None
        return JOKER_DRAW.from_row(response.data[0])

    def save_current(self, state: JokerDrawState) -> JokerDrawState:
        """Upsert the single current state row."""
        payload = {"id": CURRENT_ROW_ID, **JOKER_DRAW.to_row(asdict(state))}
        response = execute(
            self.client.table(JOKER_DRAW.table).upsert(payload, on_conflict="id"),
            "Failed to update joker draw data",
        )
        return JOKER_DRAW.from_row(
            first_row(response, "Failed to update joker draw data")
        )

    def append_history(self, state: JokerDrawState) -> None:
        """Insert a snapshot into the history table."""
        fields = asdict(state)
        recorded_at = fields.pop("updated_at")
        execute(
            self.client.table(JOKER_DRAW_HISTORY.table).insert(
                JOKER_DRAW_HISTORY.to_row({**fields, "recorded_at": recorded_at})
            ),
            "Failed to record joker draw history",
        )

    def list_history(self, limit: int) -> list[JokerDrawEntry]:
        """Return recent snapshots, newest first."""
        response = execute(
            self.client.table(JOKER_DRAW_HISTORY.table)
            .select(JOKER_DRAW_HISTORY.selection)
            .order("recorded_at", desc=True)
            .limit(limit),
            "Failed to fetch joker draw history",
        )
        return [JOKER_DRAW_HISTORY.from_row(row) for row in response.data or []]
