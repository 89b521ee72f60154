"""Remote image download client."""

from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

from clubsite.domain.errors import StorageError
from clubsite.domain.files import FileUpload
from clubsite.services.gallery import ImageFetcher
from clubsite.services.storage import DEFAULT_MAX_UPLOAD_BYTES, upload_too_large


@dataclass
class HttpxImageFetcher(ImageFetcher):
    """Image fetcher using httpx.

    Downloads are streamed and abandoned as soon as they pass ``max_bytes``.
    """

    http_client: httpx.AsyncClient
    timeout: float = 20
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    @classmethod
    def create(cls, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> "HttpxImageFetcher":
        """Create an image fetcher with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(follow_redirects=True), max_bytes=max_bytes
        )

    async def fetch(self, url: str) -> FileUpload:
        """Download an image and return it as an upload."""
        try:
            async with self.http_client.stream(
                "GET", url, timeout=self.timeout
            ) as response:
                response.raise_for_status()
                declared = response.headers.get("content-length", "")
                if declared.isdigit() and int(declared) > self.max_bytes:
                    raise upload_too_large(self.max_bytes)
                data = bytearray()
                async for chunk in response.aiter_bytes():
                    data.extend(chunk)
                    if len(data) > self.max_bytes:
                        raise upload_too_large(self.max_bytes)
                content_type = response.headers.get("content-type", "")
        except httpx.HTTPError as exc:
            raise StorageError(f"Failed to fetch image from {url}") from exc
        filename = urlparse(url).path.rsplit("/", 1)[-1] or "image"
        return FileUpload(
            data=bytes(data),
            filename=filename,
            content_type=content_type.split(";", 1)[0].strip().lower(),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
