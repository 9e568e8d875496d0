"""Tests for image loading."""

import asyncio
from io import BytesIO

import pytest
from PIL import Image

from session_export.domain.errors import ImageLoadError
from session_export.services.images import ImageLoader
from tests.conftest import FakeImageFetcher, make_png


def _jpeg_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (12, 6), "green").save(buffer, format="JPEG")
    return buffer.getvalue()


def test_load_reencodes_as_png() -> None:
    loader = ImageLoader(FakeImageFetcher(images={"photo.jpg": _jpeg_bytes()}))

    image = asyncio.run(loader.load("photo.jpg"))

    assert image.png.startswith(b"\x89PNG\r\n\x1a\n")
    assert (image.width, image.height) == (12, 6)
    with Image.open(BytesIO(image.png)) as decoded:
        assert decoded.mode == "RGB"


def test_load_keeps_transparency() -> None:
    png = make_png(color=(255, 0, 0, 128), mode="RGBA")
    loader = ImageLoader(FakeImageFetcher(images={"overlay.png": png}))

    image = asyncio.run(loader.load("overlay.png"))

    with Image.open(BytesIO(image.png)) as decoded:
        assert decoded.mode == "RGBA"


def test_load_converts_greyscale_to_rgb() -> None:
    png = make_png(color=128, mode="L")
    loader = ImageLoader(FakeImageFetcher(images={"grey.png": png}))

    image = asyncio.run(loader.load("grey.png"))

    with Image.open(BytesIO(image.png)) as decoded:
        assert decoded.mode == "RGB"


def test_load_rejects_non_image_bytes() -> None:
    loader = ImageLoader(FakeImageFetcher(images={"page.html": b"<html></html>"}))

    with pytest.raises(ImageLoadError, match="not a decodable image"):
        asyncio.run(loader.load("page.html"))


def test_load_propagates_fetch_failures() -> None:
    loader = ImageLoader(FakeImageFetcher())

    with pytest.raises(ImageLoadError) as excinfo:
        asyncio.run(loader.load("https://cdn.example.com/missing.png"))

    assert excinfo.value.url == "https://cdn.example.com/missing.png"


def test_load_rejects_images_over_pixel_limit(monkeypatch) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    png = make_png(size=(64, 64), color=1, mode="1")
    loader = ImageLoader(FakeImageFetcher(images={"huge.png": png}))

    with pytest.raises(ImageLoadError, match="pixel limit"):
        asyncio.run(loader.load("huge.png"))
