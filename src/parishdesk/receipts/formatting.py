"""Text formatting for receipt fields."""

from datetime import date
from enum import Enum

from babel.dates import format_date

RECEIPT_DATE_PATTERN = "dd MMM yyyy"


def format_receipt_date(value: date) -> str:
    """Render a date as zero-padded day, short month and year: ``05 Mar 2026``."""
    return format_date(value, RECEIPT_DATE_PATTERN, locale="en_GB")


def humanize_enum(value: Enum | str) -> str:
    """``MASS_OFFERING`` -> ``Mass Offering``."""
    raw = value.value if isinstance(value, Enum) else str(value)
    words = raw.replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def receipt_filename(transaction_number: str, extension: str = "pdf") -> str:
    """``OR/2026/00045`` -> ``receipt_OR-2026-00045.pdf``."""
    return f"receipt_{transaction_number.replace('/', '-')}.{extension}"


__all__ = ["format_receipt_date", "humanize_enum", "receipt_filename"]
