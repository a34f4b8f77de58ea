"""
Paper format presets.

Each preset bundles its page geometry and type scale so the layout code reads
from the active preset instead of branching on format identity. All lengths
are millimetres; font sizes are points.
"""

from dataclasses import dataclass
from enum import Enum

from .exceptions import UnknownReceiptFormat


@dataclass(frozen=True)
class FontScale:
    title: float
    subtitle: float
    body: float
    small: float


@dataclass(frozen=True)
class FormatGeometry:
    page_width: float
    page_height: float
    margin_x: float
    fonts: FontScale
    top_offset: float
    logo_size: float
    amount_font: float
    seal_radius: float
    is_roll: bool

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin_x


_FULL_PAGE = FormatGeometry(
    page_width=210,
    page_height=297,
    margin_x=20,
    fonts=FontScale(title=18, subtitle=12, body=10, small=8),
    top_offset=20,
    logo_size=20,
    amount_font=16,
    seal_radius=16,
    is_roll=False,
)

# Roll widths are the printable area of 80mm and 58mm paper.
_THERMAL_WIDE = FormatGeometry(
    page_width=72,
    page_height=200,
    margin_x=4,
    fonts=FontScale(title=12, subtitle=9, body=8, small=7),
    top_offset=5,
    logo_size=12,
    amount_font=9,
    seal_radius=10,
    is_roll=True,
)

_THERMAL_NARROW = FormatGeometry(
    page_width=48,
    page_height=200,
    margin_x=3,
    fonts=FontScale(title=10, subtitle=8, body=7, small=6),
    top_offset=5,
    logo_size=12,
    amount_font=8,
    seal_radius=8,
    is_roll=True,
)

_ALIASES = {
    "a4": "full-page",
    "thermal-80": "thermal-wide",
    "thermal-58": "thermal-narrow",
}


class ReceiptFormat(str, Enum):
    """Physical receipt layouts."""

    FULL_PAGE = "full-page"
    THERMAL_WIDE = "thermal-wide"
    THERMAL_NARROW = "thermal-narrow"

    @property
    def geometry(self) -> FormatGeometry:
        return _GEOMETRY[self]

    @property
    def is_thermal(self) -> bool:
        return self.geometry.is_roll

    @classmethod
    def parse(cls, value: "ReceiptFormat | str | None") -> "ReceiptFormat":
        """Resolve a format selector, accepting the legacy paper names."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            key = _ALIASES.get(key, key)
            try:
                return cls(key)
            except ValueError:
                pass
        raise UnknownReceiptFormat(value, [member.value for member in cls])


_GEOMETRY = {
    ReceiptFormat.FULL_PAGE: _FULL_PAGE,
    ReceiptFormat.THERMAL_WIDE: _THERMAL_WIDE,
    ReceiptFormat.THERMAL_NARROW: _THERMAL_NARROW,
}


__all__ = ["FontScale", "FormatGeometry", "ReceiptFormat"]
