"""
Receipt layout for parish payments.

Lays out header, detail rows, amount, footer and a seal/signature block on
one of three paper formats. Fetching the logo is the only awaited step;
``compose`` is pure and deterministic for identical inputs.
"""

import math
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit

from parishdesk.logging import get_logger
from parishdesk.money import MoneyHandler
from parishdesk.settings import Settings, get_settings

from .document import (
    FONT_BOLD,
    FONT_ITALIC,
    FONT_REGULAR,
    SEAL_BLUE,
    DetailRow,
    LayoutPen,
    ReceiptDocument,
    text_width,
)
from .exceptions import InvalidReceiptArgument
from .formats import ReceiptFormat
from .formatting import format_receipt_date, humanize_enum, receipt_filename
from .logo import LogoImage, load_logo
from .models import Organization, Payer, Transaction

logger = get_logger(__name__)

ReceiptSettings = Settings.ReceiptSettings

RECEIPT_TITLE = "PAYMENT RECEIPT"
AMOUNT_LABEL = "AMOUNT PAID:"

# Full-page detail values start this far right of the label column.
VALUE_COLUMN_OFFSET = 45
# Wrapped thermal values are indented by this much.
WRAP_INDENT = 2
SIGNATURE_LINE_LENGTH = 55
SEAL_NAME_MAX_CHARS = 20
# Widest arc the seal name may occupy, in degrees.
SEAL_NAME_MAX_SWEEP = 150
MIN_SEAL_FONT = 3.0
ELLIPSIS = "…"

_Model = TypeVar("_Model", bound=BaseModel)


def wrap_text(text: str, font: str, size: float, max_width: float) -> list[str]:
    """Split ``text`` into lines no wider than ``max_width`` millimetres.

    Words longer than a whole line are broken between characters.
    """
    lines: list[str] = []
    for line in simpleSplit(text, font, size, max_width * mm):
        while len(line) > 1 and text_width(line, font, size) > max_width:
            cut = len(line) - 1
            while cut > 1 and text_width(line[:cut], font, size) > max_width:
                cut -= 1
            lines.append(line[:cut])
            line = line[cut:].lstrip()
        if line:
            lines.append(line)
    return lines or [text]


def truncate_lines(
    lines: list[str], max_lines: int, font: str, size: float, max_width: float
) -> list[str]:
    """Keep at most ``max_lines`` lines, ending the last kept one with an ellipsis."""
    if len(lines) <= max_lines:
        return lines
    last = lines[max_lines - 1].rstrip()
    while last and text_width(last + ELLIPSIS, font, size) > max_width:
        last = last[:-1].rstrip()
    return [*lines[: max_lines - 1], last + ELLIPSIS]


def detail_rows(transaction: Transaction, payer: Payer | None) -> list[DetailRow]:
    """Labelled rows in receipt order, leaving out absent values."""
    candidates = [
        ("Receipt No.", transaction.transaction_number),
        ("Date", format_receipt_date(transaction.transaction_date)),
        ("Category", humanize_enum(transaction.category)),
        ("Payment Method", humanize_enum(transaction.payment_method)),
        ("Received From", payer.full_name if payer else None),
        ("Member/Payer Code", payer.member_code if payer else None),
        ("Reference", transaction.reference_number),
        ("Description", transaction.description),
    ]
    return [DetailRow(label, value) for label, value in candidates if value]


def _coerce(model: type[_Model], value: Any, argument: str) -> _Model:
    if value is None:
        raise InvalidReceiptArgument(f"A {argument} is required to build a receipt", argument)
    if isinstance(value, model):
        return value
    try:
        if isinstance(value, Mapping):
            return model.model_validate(dict(value))
        return model.model_validate(value, from_attributes=True)
    except ValidationError as exc:
        raise InvalidReceiptArgument(
            f"Invalid {argument}: {exc.error_count()} validation error(s)",
            argument,
            errors=exc.errors(include_url=False, include_context=False),
        ) from exc


class ReceiptDocumentBuilder:
    """Build receipt documents for the three paper formats."""

    def __init__(
        self,
        receipt_settings: ReceiptSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            receipt_settings: Currency, locale and footer configuration
            http_client: Client used for remote logos; a short-lived one is
                created per fetch when omitted
        """
        self.settings = receipt_settings or get_settings().receipts
        self.http_client = http_client
        self.money = MoneyHandler(
            default_currency=self.settings.default_currency,
            default_locale=self.settings.default_locale,
        )

    async def build(
        self,
        transaction: Transaction | Mapping[str, Any],
        organization: Organization | Mapping[str, Any],
        payer: Payer | Mapping[str, Any] | None,
        fmt: ReceiptFormat | str,
    ) -> ReceiptDocument:
        """Fetch the organization's logo (if any) and lay out the receipt.

        Raises:
            InvalidReceiptArgument: transaction, organization or format is
                missing or invalid
        """
        fmt = ReceiptFormat.parse(fmt)
        transaction = _coerce(Transaction, transaction, "transaction")
        organization = _coerce(Organization, organization, "organization")
        payer = _coerce(Payer, payer, "payer") if payer is not None else None

        logo = await load_logo(
            organization.logo_url,
            client=self.http_client,
            timeout=self.settings.logo_fetch_timeout,
        )
        return self.compose(transaction, organization, payer, fmt, logo=logo)

    def compose(
        self,
        transaction: Transaction | Mapping[str, Any],
        organization: Organization | Mapping[str, Any],
        payer: Payer | Mapping[str, Any] | None,
        fmt: ReceiptFormat | str,
        logo: LogoImage | None = None,
    ) -> ReceiptDocument:
        """Lay out a receipt from already-loaded inputs."""
        fmt = ReceiptFormat.parse(fmt)
        transaction = _coerce(Transaction, transaction, "transaction")
        organization = _coerce(Organization, organization, "organization")
        payer = _coerce(Payer, payer, "payer") if payer is not None else None

        geometry = fmt.geometry
        pen = LayoutPen(geometry)
        rows = detail_rows(transaction, payer)
        amount_text = self._format_amount(transaction, organization)

        self._draw_header(pen, organization, logo)

        last_row_y = None
        if not geometry.is_roll:
            # A fixed page must leave room for everything below the rows.
            scratch = LayoutPen(geometry)
            scratch.y = 0
            self._draw_closing(scratch, amount_text, fmt, organization, transaction)
            line_height = geometry.fonts.body * 0.5
            last_row_y = (
                geometry.page_height - geometry.top_offset - scratch.y - line_height - 5
            )

        self._draw_details(pen, rows, fmt, last_row_y)
        self._draw_closing(pen, amount_text, fmt, organization, transaction)

        document = pen.finish(
            fmt,
            title=f"Receipt {transaction.transaction_number}",
            author=organization.name,
            filename=receipt_filename(transaction.transaction_number),
            rows=rows,
            bottom_margin=geometry.top_offset,
        )
        logger.info(
            "Receipt built",
            transaction_number=transaction.transaction_number,
            format=fmt.value,
            rows=len(rows),
            has_logo=document.has_logo,
        )
        return document

    def _format_amount(self, transaction: Transaction, organization: Organization) -> str:
        try:
            money = self.money.create_money(transaction.amount, organization.currency_code)
        except ValueError as exc:
            raise InvalidReceiptArgument(str(exc), "organization") from exc
        return self.money.format_money(
            money, organization.locale, display=self.settings.currency_display
        )

    def _centered_lines(
        self, pen: LayoutPen, text: str, font: str, size: float, step: float, **kwargs: Any
    ) -> None:
        for line in wrap_text(text, font, size, pen.geometry.content_width):
            pen.centered(line, font, size, **kwargs)
            pen.advance(step)

    def _draw_header(
        self, pen: LayoutPen, organization: Organization, logo: LogoImage | None
    ) -> None:
        """Logo, organization name, contact lines and the receipt title."""
        fonts = pen.geometry.fonts

        if logo is not None:
            width, height = logo.fit(pen.geometry.logo_size)
            pen.picture(logo.data, pen.center - width / 2, pen.y, width, height)
            pen.advance(height + 2)

        self._centered_lines(
            pen, organization.name.upper(), FONT_BOLD, fonts.title, fonts.title * 0.5
        )

        contact_lines = [
            organization.physical_address,
            f"Tel: {organization.contact_phone}" if organization.contact_phone else None,
            organization.contact_email,
        ]
        for line in contact_lines:
            if line:
                self._centered_lines(pen, line, FONT_REGULAR, fonts.small, fonts.small * 0.45)

        pen.advance(2)
        pen.centered(RECEIPT_TITLE, FONT_BOLD, fonts.subtitle)
        pen.advance(fonts.subtitle * 0.5)
        pen.rule()
        pen.advance(3)

    def _draw_closing(
        self,
        pen: LayoutPen,
        amount_text: str,
        fmt: ReceiptFormat,
        organization: Organization,
        transaction: Transaction,
    ) -> None:
        """Amount, footer and the seal/signature block."""
        self._draw_amount(pen, amount_text, fmt)
        self._draw_footer(pen)
        if fmt.is_thermal:
            self._draw_thermal_seal(pen, organization)
        else:
            self._draw_full_page_seal(pen, organization, transaction)

    def _draw_details(
        self,
        pen: LayoutPen,
        rows: list[DetailRow],
        fmt: ReceiptFormat,
        last_row_y: float | None = None,
    ) -> None:
        """Labelled rows; with ``last_row_y`` set, no baseline goes below it."""
        geometry = pen.geometry
        size = geometry.fonts.body
        line_height = size * 0.5

        for position, row in enumerate(rows):
            label = f"{row.label}:"
            pen.text(label, pen.left, FONT_BOLD, size)

            if not fmt.is_thermal:
                column = pen.left + VALUE_COLUMN_OFFSET
                lines = wrap_text(row.value, FONT_REGULAR, size, pen.right - column)
                if last_row_y is not None:
                    later_rows = len(rows) - position - 1
                    room = (last_row_y - pen.y - later_rows * line_height) // line_height
                    lines = truncate_lines(
                        lines, max(int(room) + 1, 1), FONT_REGULAR, size, pen.right - column
                    )
                for index, line in enumerate(lines):
                    if index:
                        pen.advance(line_height)
                    pen.text(line, column, FONT_REGULAR, size)
            else:
                available = geometry.content_width - text_width(f"{label} ", FONT_BOLD, size)
                if text_width(row.value, FONT_REGULAR, size) <= available:
                    pen.right_aligned(row.value, FONT_REGULAR, size)
                else:
                    indent = pen.left + WRAP_INDENT
                    for line in wrap_text(row.value, FONT_REGULAR, size, pen.right - indent):
                        pen.advance(line_height)
                        pen.text(line, indent, FONT_REGULAR, size)
            pen.advance(line_height)

        pen.advance(2)
        pen.rule()
        pen.advance(3)

    def _draw_amount(self, pen: LayoutPen, amount_text: str, fmt: ReceiptFormat) -> None:
        geometry = pen.geometry
        line_height = geometry.fonts.body * 0.5
        size = geometry.amount_font

        if not fmt.is_thermal:
            pen.text(AMOUNT_LABEL, pen.left, FONT_BOLD, size)
            pen.right_aligned(amount_text, FONT_BOLD, size)
        else:
            # Shrink rather than overflow the roll for very large amounts.
            widest = max(
                text_width(AMOUNT_LABEL, FONT_BOLD, 1), text_width(amount_text, FONT_BOLD, 1)
            )
            size = min(size, geometry.content_width / widest)
            pen.centered(AMOUNT_LABEL, FONT_BOLD, size)
            pen.advance(line_height + 1)
            pen.centered(amount_text, FONT_BOLD, size)
        pen.advance(line_height + 2)

        pen.rule()
        pen.advance(4)

    def _draw_footer(self, pen: LayoutPen) -> None:
        small = pen.geometry.fonts.small
        for message in (self.settings.thank_you_message, self.settings.blessing_message):
            if message:
                self._centered_lines(pen, message, FONT_ITALIC, small, small * 0.5)
        pen.advance(3)

    def _draw_full_page_seal(
        self, pen: LayoutPen, organization: Organization, transaction: Transaction
    ) -> None:
        """Dual-ring seal followed by two pairs of signature lines."""
        geometry = pen.geometry
        small = geometry.fonts.small

        pen.advance(8)
        radius = geometry.seal_radius
        cx, cy = pen.center, pen.y + 18

        pen.ring(cx, cy, radius, 0.8, SEAL_BLUE)
        pen.ring(cx, cy, radius - 3, 0.4, SEAL_BLUE)

        name = organization.name.upper()
        name_radius = radius - 2.5
        max_arc = name_radius * math.radians(SEAL_NAME_MAX_SWEEP)
        name_size = 5.5
        while name_size > MIN_SEAL_FONT and text_width(name, FONT_BOLD, name_size) > max_arc:
            name_size -= 0.25
        pen.arc_text(name, cx, cy, name_radius, FONT_BOLD, name_size, SEAL_BLUE)

        pen.centered("OFFICIAL", FONT_BOLD, 7, SEAL_BLUE, y=cy + 1)
        pen.centered("RECEIPT", FONT_BOLD, 5, SEAL_BLUE, y=cy + 5)
        seal_date = format_receipt_date(transaction.transaction_date)
        pen.centered(seal_date, FONT_REGULAR, 4.5, SEAL_BLUE, y=cy + 10)

        pen.y = cy + radius + 8
        left = pen.left
        right = pen.center + 10
        captions = [
            ("Received By (Name & Signature)", "Authorized By (Name & Signature)"),
            ("Date", "Money Receiver (Signature)"),
        ]
        for index, (left_caption, right_caption) in enumerate(captions):
            if index:
                pen.advance(12)
            for x, caption in ((left, left_caption), (right, right_caption)):
                pen.rule(x, x + SIGNATURE_LINE_LENGTH)
                pen.text(caption, x, FONT_REGULAR, small, y=pen.y + 4)
        pen.advance(4 + small * 0.5)

    def _draw_thermal_seal(self, pen: LayoutPen, organization: Organization) -> None:
        """Single-ring seal with an abbreviated name, then signature/date blanks."""
        geometry = pen.geometry
        small = geometry.fonts.small
        radius = geometry.seal_radius

        pen.advance(3)
        cx, cy = pen.center, pen.y + radius
        pen.ring(cx, cy, radius, 0.4, SEAL_BLUE)

        name_size = 4
        chord = 2 * math.sqrt(radius**2 - 3**2) - 1
        name = organization.name.upper()[:SEAL_NAME_MAX_CHARS].strip()
        while len(name) > 1 and text_width(name, FONT_BOLD, name_size) > chord:
            name = name[:-1].rstrip()
        pen.centered(name, FONT_BOLD, name_size, SEAL_BLUE, y=cy - 3)
        pen.centered("RECEIPT", FONT_BOLD, 5, SEAL_BLUE, y=cy + 2)
        pen.advance(radius * 2 + 4)

        pen.rule()
        pen.advance(3)
        pen.text("Signature: _______________", pen.left, FONT_REGULAR, small)
        pen.advance(small * 0.5 + 1)
        pen.text("Date: _______________", pen.left, FONT_REGULAR, small)
        pen.advance(small * 0.5)


async def generate_receipt_pdf(
    transaction: Transaction | Mapping[str, Any],
    organization: Organization | Mapping[str, Any],
    payer: Payer | Mapping[str, Any] | None = None,
    fmt: ReceiptFormat | str = ReceiptFormat.FULL_PAGE,
    http_client: httpx.AsyncClient | None = None,
) -> bytes:
    """Build a receipt and return its PDF bytes."""
    from .renderer import render_pdf

    builder = ReceiptDocumentBuilder(http_client=http_client)
    document = await builder.build(transaction, organization, payer, fmt)
    return render_pdf(document)


__all__ = [
    "ReceiptDocumentBuilder",
    "detail_rows",
    "generate_receipt_pdf",
    "truncate_lines",
    "wrap_text",
]
