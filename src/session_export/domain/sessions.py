"""Session records handed to the export engine."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class SessionRecord:
    """Structured description of one creative-generation session."""

    generated_at: str
    prompt: str | None = None
    seed: str | None = None
    aspect_ratio: str | None = None
    profile: str | None = None
    blueprint: str | None = None
    filters: dict[str, str] = field(default_factory=dict)
    image_urls: tuple[str, ...] = ()


def generated_at_now() -> str:
    """Return the current UTC time as an ISO-8601 timestamp with a Z suffix."""
    now = datetime.now(tz=UTC)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_session_record(  # noqa: PLR0913
    *,
    prompt: str | None = None,
    seed: str | int | None = None,
    aspect_ratio: str | None = None,
    profile: str | None = None,
    blueprint: str | None = None,
    filters: Mapping[str, str] | None = None,
    image_urls: Iterable[str] | None = None,
    generated_at: str | None = None,
) -> SessionRecord:
    """Build a record from raw UI state, treating blank values as absent."""
    return SessionRecord(
        generated_at=generated_at or generated_at_now(),
        prompt=_present(prompt),
        seed=_present(seed),
        aspect_ratio=_present(aspect_ratio),
        profile=_present(profile),
        blueprint=_present(blueprint),
        filters={str(key): str(value) for key, value in (filters or {}).items()},
        image_urls=tuple(url for url in (image_urls or ()) if url),
    )


def _present(value: str | int | None) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None
