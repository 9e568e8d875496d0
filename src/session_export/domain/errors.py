"""Errors raised while exporting session documents."""


class ExportError(Exception):
    """Base class for export failures."""


class ImageLoadError(ExportError):
    """An image could not be fetched or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to load image {_shorten(url)}: {reason}")
        self.url = url
        self.reason = reason


class RenderingSurfaceError(ExportError):
    """No drawing or measurement surface is available for the document."""


class UnsupportedFormatError(ExportError, ValueError):
    """The requested export format is not one of json, yaml or pdf."""

    def __init__(self, requested: str) -> None:
        super().__init__(f"Unsupported export format: {requested!r}")
        self.requested = requested


def _shorten(url: str, limit: int = 80) -> str:
    """Keep data URLs from flooding log lines."""
    if len(url) <= limit:
        return url
    return f"{url[:limit]}..."
