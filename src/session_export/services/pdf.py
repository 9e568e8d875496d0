"""PDF rendering of laid-out session documents with ReportLab."""

import logging
from dataclasses import dataclass
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from session_export.domain.artifacts import ExportFormat, RenderedArtifact
from session_export.domain.errors import RenderingSurfaceError
from session_export.domain.labels import LabelSet
from session_export.domain.sessions import SessionRecord
from session_export.services.layout import (
    DocumentLayout,
    ImagePlacement,
    PdfLayoutEngine,
    TextRun,
)

_logger = logging.getLogger(__name__)


@dataclass
class PdfRenderer:
    """Draws a document layout onto PDF pages."""

    author: str = "Vectra AI"

    def render(self, layout: DocumentLayout) -> bytes:
        """Return the PDF bytes for a layout.

        Raises:
            RenderingSurfaceError: If a font or drawing surface is unavailable.
        """
        buffer = BytesIO()
        try:
            pdf = canvas.Canvas(
                buffer, pagesize=(layout.page_width, layout.page_height)
            )
            pdf.setTitle(layout.title)
            pdf.setAuthor(self.author)
            for page in layout.pages:
                for item in page.items:
                    if isinstance(item, TextRun):
                        _draw_text(pdf, item, layout.page_height)
                    else:
                        _draw_image(pdf, item, layout.page_height)
                pdf.showPage()
            pdf.save()
        except KeyError as exc:
            raise RenderingSurfaceError(f"Font is not available: {exc}") from exc
        return buffer.getvalue()


def _draw_text(pdf: canvas.Canvas, run: TextRun, page_height: float) -> None:
    pdf.setFont(run.font, run.size)
    pdf.setFillColor(colors.HexColor(run.color))
    pdf.drawString(run.x, page_height - run.y, run.text)


def _draw_image(
    pdf: canvas.Canvas, placement: ImagePlacement, page_height: float
) -> None:
    # ReportLab anchors images at their bottom-left corner.
    pdf.drawImage(
        ImageReader(BytesIO(placement.image.png)),
        placement.x,
        page_height - placement.y - placement.height,
        width=placement.width,
        height=placement.height,
        mask="auto",
    )


@dataclass
class PdfExporter:
    """Lays out and renders a session record as a PDF artifact."""

    layout_engine: PdfLayoutEngine
    renderer: PdfRenderer

    async def export(
        self, record: SessionRecord, labels: LabelSet, base_name: str
    ) -> RenderedArtifact:
        """Render a record to a PDF artifact."""
        layout = await self.layout_engine.layout(record, labels)
        content = self.renderer.render(layout)
        _logger.info(
            "Rendered PDF: pages=%s images=%s/%s bytes=%s",
            layout.page_count,
            len(layout.images()),
            len(record.image_urls),
            len(content),
        )
        return RenderedArtifact.build(ExportFormat.PDF, content, base_name)
