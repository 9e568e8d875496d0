"""Image loading for PDF embedding."""

import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from session_export.adapters.image_fetcher import ImageFetcher
from session_export.domain.errors import ImageLoadError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedImage:
    """Decoded image re-encoded as PNG, ready for embedding."""

    url: str
    png: bytes
    width: int
    height: int


@dataclass
class ImageLoader:
    """Fetches images and converts them into embeddable PNG rasters."""

    fetcher: ImageFetcher

    async def load(self, url: str) -> LoadedImage:
        """Fetch and decode one image.

        Raises:
            ImageLoadError: If the fetch fails, the bytes are not an image,
                or the colour conversion cannot be performed.
        """
        data = await self.fetcher.fetch_bytes(url)
        try:
            with Image.open(BytesIO(data)) as source:
                source.load()
                raster = source.convert(_target_mode(source))
        except Image.DecompressionBombError as exc:
            raise ImageLoadError(url, "image exceeds the decode pixel limit") from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise ImageLoadError(url, "resource is not a decodable image") from exc
        except ValueError as exc:
            raise ImageLoadError(url, f"colour conversion failed: {exc}") from exc

        buffer = BytesIO()
        raster.save(buffer, format="PNG")
        _logger.debug(
            "Loaded image: url=%s size=%sx%s", url[:80], raster.width, raster.height
        )
        return LoadedImage(
            url=url, png=buffer.getvalue(), width=raster.width, height=raster.height
        )


def _target_mode(image: Image.Image) -> str:
    """Keep an alpha channel only when the source has transparency."""
    if image.mode in {"RGBA", "LA", "PA"}:
        return "RGBA"
    if image.mode == "P" and "transparency" in image.info:
        return "RGBA"
    return "RGB"
