"""
Laid-out receipt documents.

A ``ReceiptDocument`` is the finished layout: an ordered tuple of positioned
drawing elements on a page of known size. Coordinates are millimetres measured
from the top-left corner, text ``y`` is the baseline. The renderer turns the
elements into PDF operators; nothing here touches a canvas.
"""

from dataclasses import dataclass, field
from typing import Union

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from .formats import FormatGeometry, ReceiptFormat

RGB = tuple[float, float, float]

BLACK: RGB = (0.0, 0.0, 0.0)
SEAL_BLUE: RGB = (0.0, 80 / 255, 160 / 255)

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"


def text_width(text: str, font: str, size: float) -> float:
    """Width of ``text`` in millimetres."""
    return stringWidth(text, font, size) / mm


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float
    font: str
    size: float
    width: float
    color: RGB = BLACK


@dataclass(frozen=True)
class ArcText:
    """Text centred on the top of a circle, baseline at ``radius``."""

    text: str
    cx: float
    cy: float
    radius: float
    font: str
    size: float
    color: RGB = BLACK


@dataclass(frozen=True)
class Rule:
    x1: float
    y1: float
    x2: float
    y2: float
    line_width: float
    color: RGB = BLACK


@dataclass(frozen=True)
class Ring:
    cx: float
    cy: float
    radius: float
    line_width: float
    color: RGB = BLACK


@dataclass(frozen=True)
class Picture:
    """Raster image; ``y`` is the top edge."""

    data: bytes = field(repr=False)
    x: float
    y: float
    width: float
    height: float


Element = Union[TextRun, ArcText, Rule, Ring, Picture]


@dataclass(frozen=True)
class DetailRow:
    label: str
    value: str


@dataclass(frozen=True)
class ReceiptDocument:
    """A receipt ready to be serialised or printed."""

    format: ReceiptFormat
    page_width: float
    page_height: float
    title: str
    author: str
    filename: str
    rows: tuple[DetailRow, ...]
    elements: tuple[Element, ...]

    def texts(self) -> list[str]:
        """All text in draw order."""
        return [e.text for e in self.elements if isinstance(e, (TextRun, ArcText))]

    def text_runs(self) -> list[TextRun]:
        return [e for e in self.elements if isinstance(e, TextRun)]

    @property
    def has_logo(self) -> bool:
        return any(isinstance(e, Picture) for e in self.elements)

    def row(self, label: str) -> DetailRow | None:
        for row in self.rows:
            if row.label == label:
                return row
        return None


class LayoutPen:
    """Vertical cursor that appends elements while a receipt is composed."""

    def __init__(self, geometry: FormatGeometry) -> None:
        self.geometry = geometry
        self.y = geometry.top_offset
        self.elements: list[Element] = []

    @property
    def left(self) -> float:
        return self.geometry.margin_x

    @property
    def right(self) -> float:
        return self.geometry.page_width - self.geometry.margin_x

    @property
    def center(self) -> float:
        return self.geometry.page_width / 2

    def advance(self, dy: float) -> None:
        self.y += dy

    def text(
        self,
        text: str,
        x: float,
        font: str = FONT_REGULAR,
        size: float = 10,
        color: RGB = BLACK,
        y: float | None = None,
    ) -> TextRun:
        run = TextRun(
            text=text,
            x=x,
            y=self.y if y is None else y,
            font=font,
            size=size,
            width=text_width(text, font, size),
            color=color,
        )
        self.elements.append(run)
        return run

    def centered(
        self,
        text: str,
        font: str = FONT_REGULAR,
        size: float = 10,
        color: RGB = BLACK,
        y: float | None = None,
        cx: float | None = None,
    ) -> TextRun:
        cx = self.center if cx is None else cx
        return self.text(text, cx - text_width(text, font, size) / 2, font, size, color, y)

    def right_aligned(
        self, text: str, font: str = FONT_REGULAR, size: float = 10, color: RGB = BLACK
    ) -> TextRun:
        return self.text(text, self.right - text_width(text, font, size), font, size, color)

    def rule(
        self,
        x1: float | None = None,
        x2: float | None = None,
        line_width: float = 0.3,
        y: float | None = None,
    ) -> None:
        y = self.y if y is None else y
        self.elements.append(
            Rule(
                x1=self.left if x1 is None else x1,
                y1=y,
                x2=self.right if x2 is None else x2,
                y2=y,
                line_width=line_width,
            )
        )

    def ring(self, cx: float, cy: float, radius: float, line_width: float, color: RGB) -> None:
        self.elements.append(Ring(cx, cy, radius, line_width, color))

    def arc_text(
        self, text: str, cx: float, cy: float, radius: float, font: str, size: float, color: RGB
    ) -> None:
        self.elements.append(ArcText(text, cx, cy, radius, font, size, color))

    def picture(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        self.elements.append(Picture(data, x, y, width, height))

    def finish(
        self,
        fmt: ReceiptFormat,
        *,
        title: str,
        author: str,
        filename: str,
        rows: list[DetailRow],
        bottom_margin: float,
    ) -> ReceiptDocument:
        height = self.geometry.page_height
        if self.geometry.is_roll:
            # Roll paper is cut to length; never clip content.
            height = max(height, self.y + bottom_margin)
        return ReceiptDocument(
            format=fmt,
            page_width=self.geometry.page_width,
            page_height=height,
            title=title,
            author=author,
            filename=filename,
            rows=tuple(rows),
            elements=tuple(self.elements),
        )


__all__ = [
    "ArcText",
    "DetailRow",
    "Element",
    "LayoutPen",
    "Picture",
    "ReceiptDocument",
    "Ring",
    "Rule",
    "TextRun",
    "text_width",
]
