"""Uploaded file payloads."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileUpload:
    """Raw bytes of an uploaded file with its client-side name and type."""

    data: bytes
    filename: str
    content_type: str

    @property
    def extension(self) -> str:
        """Return the lowercase file extension, without the dot."""
        _, dot, ext = self.filename.rpartition(".")
        if not dot or not ext:
            return "bin"
        return ext.lower()

    @property
    def size(self) -> int:
        """Return the payload size in bytes."""
        return len(self.data)
