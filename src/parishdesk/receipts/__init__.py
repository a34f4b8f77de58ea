"""
Payment receipts for parish income transactions.

Lays out a receipt for full-page or thermal roll paper and renders it to PDF.
"""

from .builder import ReceiptDocumentBuilder, detail_rows, generate_receipt_pdf
from .document import DetailRow, ReceiptDocument
from .exceptions import InvalidReceiptArgument, ReceiptError, UnknownReceiptFormat
from .formats import FormatGeometry, ReceiptFormat
from .formatting import format_receipt_date, humanize_enum, receipt_filename
from .logo import LogoImage, load_logo
from .models import Organization, Payer, PaymentMethod, Transaction, TransactionCategory
from .output import present, save, to_bytes

__all__ = [
    "DetailRow",
    "FormatGeometry",
    "InvalidReceiptArgument",
    "LogoImage",
    "Organization",
    "Payer",
    "PaymentMethod",
    "ReceiptDocument",
    "ReceiptDocumentBuilder",
    "ReceiptError",
    "ReceiptFormat",
    "Transaction",
    "TransactionCategory",
    "UnknownReceiptFormat",
    "detail_rows",
    "format_receipt_date",
    "generate_receipt_pdf",
    "humanize_enum",
    "load_logo",
    "present",
    "receipt_filename",
    "save",
    "to_bytes",
]
