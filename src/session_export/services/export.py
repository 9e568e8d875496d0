"""Export service dispatching session records to format renderers."""

import logging
from dataclasses import dataclass

from session_export.domain.artifacts import ExportFormat, RenderedArtifact
from session_export.domain.labels import DEFAULT_LABELS, LabelSet
from session_export.domain.sessions import SessionRecord
from session_export.services.pdf import PdfExporter
from session_export.services.serialization import render_json, render_yaml

_logger = logging.getLogger(__name__)


@dataclass
class ExportService:
    """Renders session records into JSON, YAML or PDF artifacts."""

    pdf_exporter: PdfExporter
    default_base_name: str = "vectra-ai-export"
    default_labels: LabelSet = DEFAULT_LABELS

    async def export(
        self,
        record: SessionRecord,
        export_format: str | ExportFormat,
        base_name: str | None = None,
        labels: LabelSet | None = None,
    ) -> RenderedArtifact:
        """Render a record in the requested format.

        The format is validated before any rendering or image fetching starts;
        an unknown selector raises UnsupportedFormatError.
        """
        resolved = ExportFormat.parse(export_format)
        name = base_name or self.default_base_name
        if resolved is ExportFormat.JSON:
            artifact = render_json(record, name)
        elif resolved is ExportFormat.YAML:
            artifact = render_yaml(record, name)
        else:
            artifact = await self.pdf_exporter.export(
                record, labels or self.default_labels, name
            )
        _logger.info(
            "Exported session: format=%s filename=%s bytes=%s",
            resolved,
            artifact.filename,
            len(artifact.content),
        )
        return artifact
