"""Admin-managed content: events, competitions and documents."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ClassVar, Generic, Protocol, TypeVar
from uuid import UUID

from clubsite.domain.content import Competition, CompetitionStatus, Document, Event
from clubsite.domain.errors import NotFoundError, ValidationError
from clubsite.domain.files import FileUpload
from clubsite.domain.validation import require_text
from clubsite.services.storage import (
    DEFAULT_MAX_UPLOAD_BYTES,
    ObjectStorage,
    remove_quietly,
    unique_filename,
    validate_image_upload,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordRepository(Protocol[T]):
    """Table-scoped persistence for one content type."""

    def list_records(
        self,
        filters: dict[str, object] | None = None,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> list[T]:
        """Return rows matching equality filters in the given order."""

    def get_record(self, record_id: UUID) -> T | None:
        """Return a row by id, if present."""

    def create_record(self, fields: dict[str, object]) -> T:
        """Insert a row and return it."""

    def update_record(self, record_id: UUID, fields: dict[str, object]) -> T:
        """Update a row and return it."""

    def delete_record(self, record_id: UUID) -> None:
        """Delete a row."""


@dataclass
class ContentService(Generic[T]):
    """Shared create/read/update/delete flow with an optional stored file."""

    repository: RecordRepository[T]
    storage: ObjectStorage
    bucket: str = "images"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    label: ClassVar[str] = "Record"
    folder: ClassVar[str] = ""
    file_field: ClassVar[str] = "image_path"
    required_fields: ClassVar[tuple[str, ...]] = ()
    optional_fields: ClassVar[tuple[str, ...]] = ()

    def list_items(
        self,
        filters: dict[str, object] | None = None,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> list[T]:
        """Return records, newest first unless told otherwise."""
        return self.repository.list_records(filters, order_by, descending)

    def get(self, record_id: UUID) -> T:
        """Return a record or raise NotFoundError."""
        record = self.repository.get_record(record_id)
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        return record

    def create(self, fields: dict[str, object], upload: FileUpload | None = None) -> T:
        """Create a record, storing the uploaded file first when given."""
        data = self._clean(fields, partial=False)
        stored_path = None
        if upload is not None:
            stored_path = self._store_file(upload)
            data[self.file_field] = stored_path
            data.update(self._file_details(upload, data))
        try:
            record = self.repository.create_record(data)
        except Exception:
            if stored_path:
                remove_quietly(self.storage, self.bucket, stored_path)
            raise
        logger.info("Created %s", self.label.lower())
        return record

    def update(
        self,
        record_id: UUID,
        fields: dict[str, object],
        upload: FileUpload | None = None,
    ) -> T:
        """Update a record; a new file replaces the old one."""
        current = self.get(record_id)
        data = self._clean(fields, partial=True)
        old_path = getattr(current, self.file_field)
        stored_path = None
        if upload is not None:
            stored_path = self._store_file(upload)
            data[self.file_field] = stored_path
            data.update(self._file_details(upload, data))
        if not data:
            return current
        data["updated_at"] = datetime.now(tz=UTC)
        try:
            updated = self.repository.update_record(record_id, data)
        except Exception:
            if stored_path:
                remove_quietly(self.storage, self.bucket, stored_path)
            raise
        if upload is not None and old_path:
            remove_quietly(self.storage, self.bucket, old_path)
        return updated

    def delete(self, record_id: UUID) -> None:
        """Delete a record and, best effort, its stored file."""
        current = self.get(record_id)
        self.repository.delete_record(record_id)
        path = getattr(current, self.file_field)
        if path:
            remove_quietly(self.storage, self.bucket, path)

    def file_url(self, path: str) -> str:
        """Return the public URL of a stored file."""
        return self.storage.get_public_url(self.bucket, path)

    def _clean(self, fields: dict[str, object], partial: bool) -> dict[str, object]:
        allowed = set(self.required_fields) | set(self.optional_fields)
        unknown = set(fields) - allowed
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
        data: dict[str, object] = {}
        for name in self.required_fields:
            if partial and name not in fields:
                continue
            data[name] = require_text(fields.get(name), name.replace("_", " ").title())
        for name in self.optional_fields:
            if name not in fields:
                continue
            value = fields[name]
            data[name] = value.strip() if isinstance(value, str) else value
        return self._validate(data)

    def _validate(self, data: dict[str, object]) -> dict[str, object]:
        return data

    def _validate_upload(self, upload: FileUpload) -> None:
        validate_image_upload(upload, self.max_upload_bytes)

    def _file_details(
        self, upload: FileUpload, data: dict[str, object]
    ) -> dict[str, object]:
        return {}

    def _store_file(self, upload: FileUpload) -> str:
        self._validate_upload(upload)
        name = unique_filename(upload.extension)
        path = f"{self.folder}/{name}" if self.folder else name
        return self.storage.upload(self.bucket, path, upload.data, upload.content_type)


@dataclass
class EventService(ContentService[Event]):
    """Club events."""

    label: ClassVar[str] = "Event"
    folder: ClassVar[str] = "events"
    required_fields: ClassVar[tuple[str, ...]] = (
        "title",
        "date",
        "time",
        "location",
        "category",
    )
    optional_fields: ClassVar[tuple[str, ...]] = ("description",)

    def list_events(self, category: str | None = None) -> list[Event]:
        """Return events, optionally for one category."""
        return self.list_items({"category": category} if category else None)

    def _validate(self, data: dict[str, object]) -> dict[str, object]:
        if "description" in data and data["description"] is None:
            data["description"] = ""
        return data


@dataclass
class CompetitionService(ContentService[Competition]):
    """Competitions and their status."""

    label: ClassVar[str] = "Competition"
    folder: ClassVar[str] = "competitions"
    required_fields: ClassVar[tuple[str, ...]] = (
        "title",
        "date",
        "format",
        "entry_deadline",
        "status",
    )
    optional_fields: ClassVar[tuple[str, ...]] = ("description", "winner")

    def list_competitions(self, status: str | None = None) -> list[Competition]:
        """Return competitions; filtered lists are ordered by date."""
        if status is None:
            return self.list_items()
        return self.list_items(
            {"status": _parse_competition_status(status)},
            order_by="date",
            descending=False,
        )

    def _validate(self, data: dict[str, object]) -> dict[str, object]:
        if "status" in data:
            data["status"] = _parse_competition_status(str(data["status"]))
        if "winner" in data and not data["winner"]:
            data["winner"] = None
        return data


@dataclass
class DocumentService(ContentService[Document]):
    """Downloadable documents kept in their own bucket."""

    bucket: str = "documents"
    max_upload_bytes: int = 50 * 1024 * 1024

    label: ClassVar[str] = "Document"
    file_field: ClassVar[str] = "file_path"
    required_fields: ClassVar[tuple[str, ...]] = ("title", "category")
    optional_fields: ClassVar[tuple[str, ...]] = (
        "description",
        "filetype",
        "filesize",
    )

    def list_documents(self, category: str | None = None) -> list[Document]:
        """Return documents, optionally for one category."""
        return self.list_items({"category": category} if category else None)

    def _validate(self, data: dict[str, object]) -> dict[str, object]:
        for name in self.optional_fields:
            if name in data and data[name] is None:
                data[name] = ""
        return data

    def _validate_upload(self, upload: FileUpload) -> None:
        if not upload.data:
            raise ValidationError("No file provided")
        if upload.size > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes // (1024 * 1024)
            raise ValidationError(f"File size exceeds {limit_mb}MB limit.")

    def _file_details(
        self, upload: FileUpload, data: dict[str, object]
    ) -> dict[str, object]:
        details: dict[str, object] = {}
        if not data.get("filetype"):
            details["filetype"] = upload.extension.upper()
        if not data.get("filesize"):
            details["filesize"] = format_file_size(upload.size)
        return details


def format_file_size(size: int) -> str:
    """Render a byte count the way the documents list shows it."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _parse_competition_status(value: str) -> CompetitionStatus:
    try:
        return CompetitionStatus(value)
    except ValueError as exc:
        allowed = ", ".join(status.value for status in CompetitionStatus)
        raise ValidationError(f"Status must be one of: {allowed}") from exc
