"""Joker draw jackpot state and history."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from clubsite.domain.content import JokerDrawEntry, JokerDrawState
from clubsite.domain.errors import ValidationError
from clubsite.domain.files import FileUpload
from clubsite.services.storage import (
    DEFAULT_MAX_UPLOAD_BYTES,
    ObjectStorage,
    validate_image_upload,
)


class JokerDrawRepository(Protocol):
    """Persistence interface for the joker draw record and its history."""

    def get_current(self) -> JokerDrawState | None:
        """Return the current state, if it was ever set."""

    def save_current(self, state: JokerDrawState) -> JokerDrawState:
        """Replace the current state and return it."""

    def append_history(self, state: JokerDrawState) -> None:
        """Record a snapshot in the history table."""

    def list_history(self, limit: int) -> list[JokerDrawEntry]:
        """Return recent snapshots, newest first."""


@dataclass
class JokerDrawService:
    """Application service for the joker draw."""

    repository: JokerDrawRepository
    storage: ObjectStorage
    bucket: str = "winners"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    def get_current(self) -> JokerDrawState | None:
        """Return the current jackpot and last winner."""
        return self.repository.get_current()

    def update(
        self,
        last_winner: str,
        last_win_amount: float,
        current_jackpot: float,
        winner_image_path: str | None = None,
    ) -> JokerDrawState:
        """Replace the current state and append it to the history."""
        winner = (last_winner or "").strip()
        amounts = (last_win_amount, current_jackpot)
        valid = all(math.isfinite(amount) and amount >= 0 for amount in amounts)
        if not winner or not valid:
            raise ValidationError("Invalid input values")
        state = self.repository.save_current(
            JokerDrawState(
                last_winner=winner,
                last_win_amount=float(last_win_amount),
                current_jackpot=float(current_jackpot),
                winner_image_path=winner_image_path or None,
                updated_at=datetime.now(tz=UTC),
            )
        )
        self.repository.append_history(state)
        return state

    def list_history(self, limit: int = 20) -> list[JokerDrawEntry]:
        """Return recent joker draw snapshots."""
        return self.repository.list_history(max(1, limit))

    def upload_winner_image(self, upload: FileUpload) -> str:
        """Store a winner photo and return its storage path."""
        validate_image_upload(upload, self.max_upload_bytes)
        path = f"joker-draw/joker-winner-{uuid4()}.{upload.extension}"
        return self.storage.upload(
            self.bucket, path, upload.data, upload.content_type, upsert=True
        )

    def winner_image_url(self, path: str) -> str:
        """Return the public URL for a winner photo."""
        return self.storage.get_public_url(self.bucket, path)
