"""JSON and YAML renderers for session records."""

import json

import yaml

from session_export.domain.artifacts import ExportFormat, RenderedArtifact
from session_export.domain.sessions import SessionRecord

_SCALAR_FIELDS = (
    ("prompt", "prompt"),
    ("seed", "seed"),
    ("aspectRatio", "aspect_ratio"),
    ("profile", "profile"),
    ("blueprint", "blueprint"),
)


class _BlockDumper(yaml.SafeDumper):
    """Safe dumper that keeps multi-line strings in literal block style."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_BlockDumper.add_representer(str, _represent_str)


def record_to_dict(record: SessionRecord) -> dict[str, object]:
    """Convert a record to its wire mapping, omitting absent scalars."""
    data: dict[str, object] = {}
    for key, attr in _SCALAR_FIELDS:
        value = getattr(record, attr)
        if value is not None:
            data[key] = value
    data["filters"] = dict(record.filters)
    data["imageUrls"] = list(record.image_urls)
    data["generatedAt"] = record.generated_at
    return data


def record_from_dict(data: dict[str, object]) -> SessionRecord:
    """Rebuild a record from its wire mapping."""
    if "generatedAt" not in data:
        raise ValueError("Session record is missing generatedAt")
    scalars = {
        attr: None if data.get(key) is None else str(data[key])
        for key, attr in _SCALAR_FIELDS
    }
    filters = data.get("filters") or {}
    image_urls = data.get("imageUrls") or []
    if not isinstance(filters, dict) or not isinstance(image_urls, list):
        raise ValueError("Session record has malformed filters or imageUrls")
    return SessionRecord(
        generated_at=str(data["generatedAt"]),
        filters={str(key): str(value) for key, value in filters.items()},
        image_urls=tuple(str(url) for url in image_urls),
        **scalars,
    )


def render_json(record: SessionRecord, base_name: str) -> RenderedArtifact:
    """Serialize a record as 2-space indented JSON."""
    text = json.dumps(record_to_dict(record), indent=2, ensure_ascii=False)
    return RenderedArtifact.build(ExportFormat.JSON, text.encode("utf-8"), base_name)


def render_yaml(record: SessionRecord, base_name: str) -> RenderedArtifact:
    """Serialize a record as block-style YAML without line wrapping."""
    text = yaml.dump(
        record_to_dict(record),
        Dumper=_BlockDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
    return RenderedArtifact.build(ExportFormat.YAML, text.encode("utf-8"), base_name)


def decode_json(content: bytes) -> SessionRecord:
    """Parse JSON export bytes back into a record."""
    return record_from_dict(json.loads(content.decode("utf-8")))


def decode_yaml(content: bytes) -> SessionRecord:
    """Parse YAML export bytes back into a record."""
    return record_from_dict(yaml.safe_load(content.decode("utf-8")))
