"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from session_export.adapters.image_fetcher import HttpxImageFetcher, ImageFetcher
from session_export.config import Settings, parse_page_size
from session_export.services.export import ExportService
from session_export.services.images import ImageLoader
from session_export.services.layout import PdfLayoutEngine
from session_export.services.pdf import PdfExporter, PdfRenderer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    image_fetcher: ImageFetcher
    export_service: ExportService
    close_resources: Callable[[], Awaitable[None]]


def build_export_service(settings: Settings, fetcher: ImageFetcher) -> ExportService:
    """Wire the export service around an image fetcher."""
    layout_engine = PdfLayoutEngine(
        image_loader=ImageLoader(fetcher),
        page_size=parse_page_size(settings.pdf_page_size),
    )
    pdf_exporter = PdfExporter(
        layout_engine=layout_engine,
        renderer=PdfRenderer(author=settings.pdf_author),
    )
    return ExportService(
        pdf_exporter=pdf_exporter,
        default_base_name=settings.default_base_name,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    image_fetcher = HttpxImageFetcher.create(
        timeout_seconds=resolved_settings.image_fetch_timeout_seconds
    )
    export_service = build_export_service(resolved_settings, image_fetcher)

    async def close_resources() -> None:
        await image_fetcher.close()

    return AppContainer(
        settings=resolved_settings,
        image_fetcher=image_fetcher,
        export_service=export_service,
        close_resources=close_resources,
    )
