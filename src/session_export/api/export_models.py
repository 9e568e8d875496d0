"""Pydantic models for export request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from session_export.domain.labels import LabelSet
from session_export.domain.sessions import SessionRecord, build_session_record


class SessionRecordPayload(BaseModel):
    """Session record payload using the camelCase wire names."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str | None = None
    seed: str | int | None = None
    aspect_ratio: str | None = Field(default=None, alias="aspectRatio")
    profile: str | None = None
    blueprint: str | None = None
    filters: dict[str, str] = Field(default_factory=dict)
    image_urls: list[str] = Field(default_factory=list, alias="imageUrls")
    generated_at: str = Field(alias="generatedAt", min_length=1)

    def to_record(self) -> SessionRecord:
        """Convert to a domain record, treating blank values as absent."""
        return build_session_record(
            prompt=self.prompt,
            seed=self.seed,
            aspect_ratio=self.aspect_ratio,
            profile=self.profile,
            blueprint=self.blueprint,
            filters=self.filters,
            image_urls=self.image_urls,
            generated_at=self.generated_at,
        )


class LabelSetPayload(BaseModel):
    """Localized PDF labels; all nine are required."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    prompt: str
    seed: str
    aspect_ratio: str = Field(alias="aspectRatio")
    profile: str
    blueprint: str
    filters: str
    generated_at: str = Field(alias="generatedAt")
    images: str

    def to_label_set(self) -> LabelSet:
        return LabelSet(**self.model_dump())


class ExportRequest(BaseModel):
    """Body of an export request."""

    model_config = ConfigDict(populate_by_name=True)

    record: SessionRecordPayload
    labels: LabelSetPayload | None = None
    base_name: str | None = Field(
        default=None, alias="baseName", pattern=r"^[\w.-]+$", max_length=120
    )
