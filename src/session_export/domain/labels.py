"""Localized display strings for PDF section titles."""

from collections.abc import Mapping
from dataclasses import dataclass

_WIRE_KEYS = {
    "title": "title",
    "prompt": "prompt",
    "seed": "seed",
    "aspectRatio": "aspect_ratio",
    "profile": "profile",
    "blueprint": "blueprint",
    "filters": "filters",
    "generatedAt": "generated_at",
    "images": "images",
}


@dataclass(frozen=True)
class LabelSet:
    """The nine labels used to title sections of an exported PDF."""

    title: str
    prompt: str
    seed: str
    aspect_ratio: str
    profile: str
    blueprint: str
    filters: str
    generated_at: str
    images: str

    @classmethod
    def from_mapping(cls, labels: Mapping[str, str]) -> "LabelSet":
        """Build a label set from camelCase localization keys.

        Raises:
            KeyError: If any of the nine labels is missing.
        """
        missing = [key for key in _WIRE_KEYS if key not in labels]
        if missing:
            raise KeyError(f"Missing export labels: {', '.join(missing)}")
        return cls(**{attr: labels[key] for key, attr in _WIRE_KEYS.items()})


DEFAULT_LABELS = LabelSet(
    title="Vectra AI Export",
    prompt="Prompt",
    seed="Seed",
    aspect_ratio="Aspect Ratio",
    profile="Profile",
    blueprint="Blueprint",
    filters="Filters",
    generated_at="Generated At",
    images="Images",
)
