"""Domain models for admin-managed site content."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class CompetitionStatus(StrEnum):
    """Lifecycle label for a competition."""

    UPCOMING = "Upcoming"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class Event:
    """Club event shown on the public events tab."""

    id: UUID
    title: str
    date: str
    time: str
    location: str
    description: str
    category: str
    image_path: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Competition:
    """Competition listing with an entry deadline and status."""

    id: UUID
    title: str
    date: str
    format: str
    entry_deadline: str
    description: str
    status: CompetitionStatus
    winner: str | None = None
    image_path: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Document:
    """Downloadable club document."""

    id: UUID
    title: str
    description: str
    filetype: str
    filesize: str
    category: str
    file_path: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ResultItem:
    """Placing within a result sheet."""

    id: UUID
    result_id: UUID
    position: str
    name: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class Result:
    """Result sheet with its ordered placings."""

    id: UUID
    title: str
    date: str
    category: str
    items: list[ResultItem] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class JokerDrawState:
    """Current joker draw jackpot and the last winner."""

    last_winner: str
    last_win_amount: float
    current_jackpot: float
    winner_image_path: str | None
    updated_at: datetime | None


@dataclass(frozen=True)
class JokerDrawEntry:
    """Historical joker draw snapshot."""

    id: int
    last_winner: str
    last_win_amount: float
    current_jackpot: float
    winner_image_path: str | None
    recorded_at: datetime | None
