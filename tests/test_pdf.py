"""Tests for PDF rendering."""

import asyncio

import pytest

from session_export.domain.errors import RenderingSurfaceError
from session_export.domain.labels import DEFAULT_LABELS
from session_export.domain.sessions import SessionRecord
from session_export.services.layout import (
    DocumentLayout,
    PageLayout,
    PdfLayoutEngine,
    TextRun,
)
from session_export.services.pdf import PdfExporter, PdfRenderer


def test_renderer_produces_pdf_with_embedded_images(
    layout_engine: PdfLayoutEngine, full_record: SessionRecord
) -> None:
    layout = asyncio.run(layout_engine.layout(full_record, DEFAULT_LABELS))

    content = PdfRenderer().render(layout)

    assert content.startswith(b"%PDF-")
    assert content.rstrip().endswith(b"%%EOF")
    assert b"/Subtype /Image" in content


def test_renderer_without_images_has_no_image_objects(
    layout_engine: PdfLayoutEngine,
) -> None:
    record = SessionRecord(generated_at="2026-10-18T09:30:00.000Z")
    layout = asyncio.run(layout_engine.layout(record, DEFAULT_LABELS))

    content = PdfRenderer().render(layout)

    assert content.startswith(b"%PDF-")
    assert b"/Subtype /Image" not in content


def test_renderer_reports_unknown_font() -> None:
    layout = DocumentLayout(
        title="Broken",
        page_width=595.0,
        page_height=842.0,
        pages=[
            PageLayout(
                items=[TextRun(text="x", x=10, y=10, font="NoSuchFont", size=10)]
            )
        ],
    )

    with pytest.raises(RenderingSurfaceError):
        PdfRenderer().render(layout)


def test_pdf_exporter_names_artifact(
    layout_engine: PdfLayoutEngine, full_record: SessionRecord
) -> None:
    exporter = PdfExporter(layout_engine=layout_engine, renderer=PdfRenderer())

    artifact = asyncio.run(exporter.export(full_record, DEFAULT_LABELS, "session-42"))

    assert artifact.filename == "session-42.pdf"
    assert artifact.media_type == "application/pdf"
    assert artifact.content.startswith(b"%PDF-")
