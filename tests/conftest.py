"""Shared test fixtures."""

from dataclasses import dataclass, field
from io import BytesIO

import pytest
from PIL import Image

from session_export.adapters.image_fetcher import ImageFetcher
from session_export.config import Settings
from session_export.containers import AppContainer, build_export_service
from session_export.domain.errors import ImageLoadError
from session_export.domain.sessions import SessionRecord
from session_export.services.export import ExportService
from session_export.services.images import ImageLoader
from session_export.services.layout import PdfLayoutEngine


def make_png(
    size: tuple[int, int] = (8, 8), color: str = "red", mode: str = "RGB"
) -> bytes:
    """Return PNG bytes for a solid-colour image."""
    buffer = BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@dataclass
class FakeImageFetcher(ImageFetcher):
    """Image fetcher serving bytes from a dict; unknown URLs fail to load."""

    images: dict[str, bytes] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)

    async def fetch_bytes(self, url: str) -> bytes:
        self.requested.append(url)
        if url not in self.images:
            raise ImageLoadError(url, "not found")
        return self.images[url]


@pytest.fixture
def settings() -> Settings:
    return Settings(default_base_name="session-export-test")


@pytest.fixture
def image_fetcher() -> FakeImageFetcher:
    return FakeImageFetcher(
        images={
            "valid-1": make_png(color="red"),
            "valid-2": make_png(color="blue"),
            "not-an-image": b"plain text, not pixels",
        }
    )


@pytest.fixture
def layout_engine(image_fetcher: FakeImageFetcher) -> PdfLayoutEngine:
    return PdfLayoutEngine(image_loader=ImageLoader(image_fetcher))


@pytest.fixture
def export_service(
    settings: Settings, image_fetcher: FakeImageFetcher
) -> ExportService:
    return build_export_service(settings, image_fetcher)


@pytest.fixture
def full_record() -> SessionRecord:
    return SessionRecord(
        generated_at="2026-10-18T09:30:00.000Z",
        prompt="A lighthouse on a basalt cliff at dusk, volumetric fog",
        seed="424242",
        aspect_ratio="16:9",
        profile="Cinematic",
        blueprint="Coastal Noir",
        filters={"Brightness": "120%", "Contrast": "80%"},
        image_urls=("valid-1", "valid-2"),
    )


@pytest.fixture
def container(
    settings: Settings,
    image_fetcher: FakeImageFetcher,
    export_service: ExportService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        image_fetcher=image_fetcher,
        export_service=export_service,
        close_resources=close_resources,
    )
