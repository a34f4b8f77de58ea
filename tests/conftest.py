"""
Shared pytest fixtures for receipt tests.
"""

import io
from datetime import date
from decimal import Decimal

import pytest
from PIL import Image

from parishdesk.receipts import (
    Organization,
    Payer,
    PaymentMethod,
    ReceiptDocumentBuilder,
    Transaction,
    TransactionCategory,
)
from parishdesk.settings import Settings, reset_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Make sure environment tweaks in one test do not leak into another."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def receipt_settings() -> Settings.ReceiptSettings:
    return Settings.ReceiptSettings()


@pytest.fixture
def builder(receipt_settings) -> ReceiptDocumentBuilder:
    return ReceiptDocumentBuilder(receipt_settings=receipt_settings)


@pytest.fixture
def organization() -> Organization:
    return Organization(
        name="St. Paul Parish",
        physical_address="P.O. Box 45, Moshi",
        contact_phone="+255 712 000 111",
        contact_email="office@stpaul.example",
        currency_code="TZS",
        locale="en_TZ",
    )


@pytest.fixture
def payer() -> Payer:
    return Payer(first_name="Maria", last_name="Mushi", member_code="STP-0042")


@pytest.fixture
def transaction() -> Transaction:
    return Transaction(
        transaction_number="OR/2026/00045",
        category=TransactionCategory.MASS_OFFERING,
        amount=Decimal("12345.5"),
        payment_method=PaymentMethod.BANK_TRANSFER,
        transaction_date=date(2026, 3, 5),
        reference_number="NMB-77812",
        description="Mass for the repose of the soul of John",
    )


@pytest.fixture
def bare_transaction() -> Transaction:
    """A transaction without any optional text."""
    return Transaction(
        transaction_number="OR/2026/00046",
        category=TransactionCategory.TITHE,
        amount=Decimal("0"),
        payment_method=PaymentMethod.CASH,
        transaction_date=date(2026, 3, 6),
    )


@pytest.fixture
def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), (0, 80, 160)).save(buffer, format="PNG")
    return buffer.getvalue()
