"""Export formats and rendered artifacts."""

from dataclasses import dataclass
from enum import StrEnum

from session_export.domain.errors import UnsupportedFormatError

_MEDIA_TYPES = {
    "json": "application/json",
    "yaml": "text/yaml",
    "pdf": "application/pdf",
}


class ExportFormat(StrEnum):
    """Closed set of supported export formats."""

    JSON = "json"
    YAML = "yaml"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        """File extension without the leading dot."""
        return self.value

    @property
    def media_type(self) -> str:
        """MIME type of artifacts in this format."""
        return _MEDIA_TYPES[self.value]

    @classmethod
    def parse(cls, value: "str | ExportFormat") -> "ExportFormat":
        """Resolve a format selector, rejecting anything unsupported."""
        if isinstance(value, ExportFormat):
            return value
        normalized = value.strip().lower() if isinstance(value, str) else value
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedFormatError(str(value)) from None

    def filename(self, base_name: str) -> str:
        """Return the suggested filename for a base name."""
        return f"{base_name}.{self.extension}"


@dataclass(frozen=True)
class RenderedArtifact:
    """Bytes produced by one export call."""

    content: bytes
    filename: str
    media_type: str

    @classmethod
    def build(
        cls, export_format: ExportFormat, content: bytes, base_name: str
    ) -> "RenderedArtifact":
        """Create an artifact named and typed for the given format."""
        return cls(
            content=content,
            filename=export_format.filename(base_name),
            media_type=export_format.media_type,
        )
