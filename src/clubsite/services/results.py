"""Result sheets and their placings."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from clubsite.domain.content import Result, ResultItem
from clubsite.domain.errors import NotFoundError, RepositoryError, ValidationError
from clubsite.domain.validation import require_text

logger = logging.getLogger(__name__)

_RESULT_FIELDS = ("title", "date", "category")


class ResultRepository(Protocol):
    """Persistence interface for results and result items."""

    def list_results(self, category: str | None = None) -> list[Result]:
        """Return results without items, newest first."""

    def get_result(self, result_id: UUID) -> Result | None:
        """Return a result without items, if present."""

    def create_result(self, fields: dict[str, object]) -> Result:
        """Insert a result row and return it."""

    def update_result(self, result_id: UUID, fields: dict[str, object]) -> Result:
        """Update a result row and return it."""

    def delete_result(self, result_id: UUID) -> None:
        """Delete a result row."""

    def list_items(self, result_ids: list[UUID]) -> list[ResultItem]:
        """Return items for the given results in insertion order."""

    def create_items(self, result_id: UUID, items: list[dict[str, str]]) -> None:
        """Insert items for a result."""

    def delete_items(self, result_id: UUID) -> None:
        """Delete all items of a result."""


@dataclass
class ResultService:
    """Application service for result sheets."""

    repository: ResultRepository

    def list_results(self, category: str | None = None) -> list[Result]:
        """Return results with their items attached."""
        results = self.repository.list_results(category)
        if not results:
            return []
        items = self.repository.list_items([result.id for result in results])
        grouped: dict[UUID, list[ResultItem]] = {}
        for item in items:
            grouped.setdefault(item.result_id, []).append(item)
        return [replace(result, items=grouped.get(result.id, [])) for result in results]

    def get_result(self, result_id: UUID) -> Result:
        """Return one result with its items."""
        result = self.repository.get_result(result_id)
        if result is None:
            raise NotFoundError("Result not found")
        return replace(result, items=self.repository.list_items([result_id]))

    def create_result(
        self, fields: dict[str, object], items: list[dict[str, str]] | None = None
    ) -> Result:
        """Create a result and its items; undo the result if items fail."""
        data = _clean_fields(fields, partial=False)
        cleaned_items = _clean_items(items or [])
        created = self.repository.create_result(data)
        if cleaned_items:
            try:
                self.repository.create_items(created.id, cleaned_items)
            except Exception as exc:
                logger.exception(
                    "Failed to create result items",
                    extra={"result_id": str(created.id)},
                )
                self.repository.delete_result(created.id)
                raise RepositoryError("Failed to create result items") from exc
        return self.get_result(created.id)

    def update_result(
        self,
        result_id: UUID,
        fields: dict[str, object],
        items: list[dict[str, str]] | None = None,
    ) -> Result:
        """Update result fields; a given item list replaces the existing one."""
        self.get_result(result_id)
        data = _clean_fields(fields, partial=True)
        cleaned_items = _clean_items(items) if items is not None else None
        if data:
            data["updated_at"] = datetime.now(tz=UTC)
            self.repository.update_result(result_id, data)
        if cleaned_items is not None:
            self.repository.delete_items(result_id)
            if cleaned_items:
                self.repository.create_items(result_id, cleaned_items)
        return self.get_result(result_id)

    def delete_result(self, result_id: UUID) -> None:
        """Delete a result and its items."""
        self.get_result(result_id)
        self.repository.delete_items(result_id)
        self.repository.delete_result(result_id)


def _clean_fields(fields: dict[str, object], partial: bool) -> dict[str, object]:
    unknown = set(fields) - set(_RESULT_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
    data: dict[str, object] = {}
    for name in _RESULT_FIELDS:
        if partial and name not in fields:
            continue
        data[name] = require_text(fields.get(name), name.title())
    return data


def _clean_items(items: list[dict[str, str]]) -> list[dict[str, str]]:
    return [
        {
            "position": require_text(item.get("position"), "Position"),
            "name": require_text(item.get("name"), "Name"),
        }
        for item in items
    ]
