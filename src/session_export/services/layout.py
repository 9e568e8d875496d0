"""Page layout for PDF session exports.

The engine flows a session record top to bottom across fixed-size pages,
tracking a vertical cursor measured from the top edge of the current page.
Each text line or image block is checked against the bottom margin before it
is placed; when it does not fit, a new page is started and the cursor returns
to the top margin. Content order is never changed across a break.

Images are fetched one at a time, in list order. A failed image is replaced
by a one-line placeholder and never aborts the layout.
"""

import logging
from dataclasses import dataclass, field

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics

from session_export.domain.errors import ImageLoadError, RenderingSurfaceError
from session_export.domain.labels import LabelSet
from session_export.domain.sessions import SessionRecord
from session_export.services.images import ImageLoader, LoadedImage

_logger = logging.getLogger(__name__)

MARGIN = 20 * mm
IMAGE_SIZE = 80 * mm
IMAGE_GAP = 10 * mm
# Below this much space the images section starts on a fresh page.
IMAGES_MIN_SPACE = 47 * mm

TITLE_SIZE = 20
SECTION_SIZE = 12
SCALAR_SIZE = 11
BODY_SIZE = 10

INK = "#000000"
MUTED = "#646464"

# (record attribute, value column offset from the margin)
_SCALAR_FIELDS = (
    ("seed", 30 * mm),
    ("aspect_ratio", 50 * mm),
    ("profile", 30 * mm),
    ("blueprint", 35 * mm),
)


@dataclass(frozen=True)
class Fonts:
    """Font faces used by the layout."""

    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"
    italic: str = "Helvetica-Oblique"


@dataclass(frozen=True)
class TextRun:
    """Text drawn at a baseline position measured from the page top."""

    text: str
    x: float
    y: float
    font: str
    size: float
    color: str = INK


@dataclass(frozen=True)
class ImagePlacement:
    """Image drawn with its top-left corner at (x, y) from the page top."""

    image: LoadedImage
    index: int
    x: float
    y: float
    width: float
    height: float


@dataclass
class PageLayout:
    """Items placed on one page, in drawing order."""

    items: list[TextRun | ImagePlacement] = field(default_factory=list)

    def lines(self) -> list[str]:
        """Return the page's text lines, joining runs that share a baseline."""
        lines: list[str] = []
        baseline: float | None = None
        for item in self.items:
            if not isinstance(item, TextRun):
                baseline = None
                continue
            if item.y == baseline:
                lines[-1] = f"{lines[-1]} {item.text}"
            else:
                lines.append(item.text)
                baseline = item.y
        return lines


@dataclass
class DocumentLayout:
    """A laid-out document ready to be drawn."""

    title: str
    page_width: float
    page_height: float
    pages: list[PageLayout]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def lines(self) -> list[str]:
        """Return all text lines in reading order."""
        return [line for page in self.pages for line in page.lines()]

    def images(self) -> list[ImagePlacement]:
        """Return all placed images in reading order."""
        return [
            item
            for page in self.pages
            for item in page.items
            if isinstance(item, ImagePlacement)
        ]


@dataclass
class _Flow:
    """Per-call cursor state."""

    page_width: float
    page_height: float
    pages: list[PageLayout] = field(default_factory=lambda: [PageLayout()])
    y: float = MARGIN

    @property
    def bottom(self) -> float:
        return self.page_height - MARGIN

    @property
    def at_page_top(self) -> bool:
        return self.y <= MARGIN

    def new_page(self) -> None:
        self.pages.append(PageLayout())
        self.y = MARGIN

    def ensure_room(self, height: float) -> None:
        if self.y + height > self.bottom and not self.at_page_top:
            self.new_page()

    def line(
        self,
        *parts: tuple[str, str, float],
        size: float,
        advance: float,
        color: str = INK,
    ) -> None:
        """Place one line made of (text, font, x) parts."""
        self.ensure_room(advance)
        page = self.pages[-1]
        for text, font, x in parts:
            page.items.append(
                TextRun(text=text, x=x, y=self.y, font=font, size=size, color=color)
            )
        self.y += advance

    def image(self, image: LoadedImage, index: int) -> None:
        self.ensure_room(IMAGE_SIZE)
        self.pages[-1].items.append(
            ImagePlacement(
                image=image,
                index=index,
                x=MARGIN,
                y=self.y,
                width=IMAGE_SIZE,
                height=IMAGE_SIZE,
            )
        )
        self.y += IMAGE_SIZE + IMAGE_GAP

    def skip(self, amount: float) -> None:
        self.y += amount


@dataclass
class PdfLayoutEngine:
    """Lays out session records onto fixed-size pages."""

    image_loader: ImageLoader
    page_size: tuple[float, float] = A4
    fonts: Fonts = field(default_factory=Fonts)

    @property
    def writable_width(self) -> float:
        return self.page_size[0] - 2 * MARGIN

    async def layout(self, record: SessionRecord, labels: LabelSet) -> DocumentLayout:
        """Lay out a record, fetching its images in order.

        Raises:
            RenderingSurfaceError: If the fonts needed for measurement are
                unavailable.
        """
        self._require_fonts()
        flow = _Flow(page_width=self.page_size[0], page_height=self.page_size[1])
        fonts = self.fonts

        flow.line((labels.title, fonts.bold, MARGIN), size=TITLE_SIZE, advance=15 * mm)
        flow.line(
            (f"{labels.generated_at}: {record.generated_at}", fonts.regular, MARGIN),
            size=BODY_SIZE,
            advance=15 * mm,
            color=MUTED,
        )

        if record.prompt is not None:
            self._layout_prompt(flow, record.prompt, labels)
        self._layout_scalars(flow, record, labels)
        if record.filters:
            self._layout_filters(flow, record.filters, labels)
        if record.image_urls:
            await self._layout_images(flow, record.image_urls, labels)

        return DocumentLayout(
            title=labels.title,
            page_width=flow.page_width,
            page_height=flow.page_height,
            pages=flow.pages,
        )

    def wrap(self, text: str, size: float = BODY_SIZE) -> list[str]:
        """Split text into lines that fit the writable width."""
        font = self.fonts.regular
        try:
            lines: list[str] = []
            for line in simpleSplit(text, font, size, self.writable_width):
                if pdfmetrics.stringWidth(line, font, size) <= self.writable_width:
                    lines.append(line)
                else:
                    lines.extend(self._break_long_line(line, size))
        except KeyError as exc:
            raise RenderingSurfaceError(
                f"Font {font!r} is not available for measurement"
            ) from exc
        return lines

    def _break_long_line(self, line: str, size: float) -> list[str]:
        """Break a line with no usable spaces at character boundaries."""
        chunks: list[str] = []
        current = ""
        for char in line:
            candidate = current + char
            width = pdfmetrics.stringWidth(candidate, self.fonts.regular, size)
            if current and width > self.writable_width:
                chunks.append(current)
                current = char
            else:
                current = candidate
        if current:
            chunks.append(current)
        return chunks

    def _layout_prompt(self, flow: _Flow, prompt: str, labels: LabelSet) -> None:
        flow.line(
            (labels.prompt, self.fonts.bold, MARGIN), size=SECTION_SIZE, advance=8 * mm
        )
        for text in self.wrap(prompt):
            flow.line(
                (text, self.fonts.regular, MARGIN), size=BODY_SIZE, advance=5 * mm
            )
        flow.skip(10 * mm)

    def _layout_scalars(
        self, flow: _Flow, record: SessionRecord, labels: LabelSet
    ) -> None:
        for attr, offset in _SCALAR_FIELDS:
            value = getattr(record, attr)
            if value is None:
                continue
            flow.line(
                (f"{getattr(labels, attr)}:", self.fonts.bold, MARGIN),
                (value, self.fonts.regular, MARGIN + offset),
                size=SCALAR_SIZE,
                advance=10 * mm,
            )

    def _layout_filters(
        self, flow: _Flow, filters: dict[str, str], labels: LabelSet
    ) -> None:
        flow.line(
            (labels.filters, self.fonts.bold, MARGIN), size=SECTION_SIZE, advance=8 * mm
        )
        for key, value in filters.items():
            flow.line(
                (f"• {key}: {value}", self.fonts.regular, MARGIN + 5 * mm),
                size=BODY_SIZE,
                advance=6 * mm,
            )
        flow.skip(5 * mm)

    async def _layout_images(
        self, flow: _Flow, image_urls: tuple[str, ...], labels: LabelSet
    ) -> None:
        if flow.page_height - flow.y < IMAGES_MIN_SPACE and not flow.at_page_top:
            flow.new_page()
        flow.line(
            (labels.images, self.fonts.bold, MARGIN),
            size=SECTION_SIZE,
            advance=10 * mm,
        )
        for index, url in enumerate(image_urls, start=1):
            try:
                image = await self.image_loader.load(url)
            except ImageLoadError as exc:
                _logger.warning("Image %s failed to load for PDF: %s", index, exc)
                flow.line(
                    (f"[Image {index}: Failed to load]", self.fonts.italic, MARGIN),
                    size=SECTION_SIZE,
                    advance=10 * mm,
                )
                continue
            flow.image(image, index)

    def _require_fonts(self) -> None:
        for name in (self.fonts.regular, self.fonts.bold, self.fonts.italic):
            try:
                pdfmetrics.getFont(name)
            except KeyError as exc:
                raise RenderingSurfaceError(f"Font {name!r} is not available") from exc
