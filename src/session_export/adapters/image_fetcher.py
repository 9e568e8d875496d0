"""Image byte fetching for remote and inline image references."""

import base64
import binascii
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import unquote_to_bytes

import httpx

from session_export.domain.errors import ImageLoadError


class ImageFetcher(Protocol):
    """Interface for retrieving raw image bytes."""

    async def fetch_bytes(self, url: str) -> bytes:
        """Return the bytes behind an image URL or raise ImageLoadError."""


@dataclass
class HttpxImageFetcher(ImageFetcher):
    """Image fetcher using httpx for remote URLs and decoding data URLs inline."""

    http_client: httpx.AsyncClient
    timeout_seconds: float = 20.0

    @classmethod
    def create(cls, timeout_seconds: float = 20.0) -> "HttpxImageFetcher":
        """Create a fetcher with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(follow_redirects=True),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_bytes(self, url: str) -> bytes:
        """Fetch image bytes without sending credentials."""
        if url.startswith("data:"):
            return _decode_data_url(url)
        try:
            response = await self.http_client.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ImageLoadError(url, str(exc) or type(exc).__name__) from exc
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _decode_data_url(url: str) -> bytes:
    """Decode an RFC 2397 data URL into bytes."""
    header, separator, payload = url[len("data:") :].partition(",")
    if not separator:
        raise ImageLoadError(url, "malformed data URL")
    if header.endswith(";base64"):
        try:
            return base64.b64decode("".join(payload.split()), validate=True)
        except binascii.Error as exc:
            raise ImageLoadError(url, "invalid base64 payload") from exc
    return unquote_to_bytes(payload)
