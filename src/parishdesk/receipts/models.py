"""
Read-only records consumed by the receipt builder.

The records are owned by the parish API; these models only describe the
fields a receipt needs. Instances are frozen so a build can never modify them.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionCategory(str, Enum):
    """Income and expense categories."""

    TITHE = "TITHE"
    OFFERTORY = "OFFERTORY"
    THANKSGIVING = "THANKSGIVING"
    DONATION = "DONATION"
    FUNDRAISING = "FUNDRAISING"
    MASS_OFFERING = "MASS_OFFERING"
    WEDDING_FEE = "WEDDING_FEE"
    BAPTISM_FEE = "BAPTISM_FEE"
    FUNERAL_FEE = "FUNERAL_FEE"
    CERTIFICATE_FEE = "CERTIFICATE_FEE"
    RENT_INCOME = "RENT_INCOME"
    INVESTMENT_INCOME = "INVESTMENT_INCOME"
    OTHER_INCOME = "OTHER_INCOME"
    SALARY_EXPENSE = "SALARY_EXPENSE"
    UTILITIES_EXPENSE = "UTILITIES_EXPENSE"
    MAINTENANCE_EXPENSE = "MAINTENANCE_EXPENSE"
    SUPPLIES_EXPENSE = "SUPPLIES_EXPENSE"
    DIOCESAN_LEVY = "DIOCESAN_LEVY"
    CHARITY_EXPENSE = "CHARITY_EXPENSE"
    CONSTRUCTION_EXPENSE = "CONSTRUCTION_EXPENSE"
    OTHER_EXPENSE = "OTHER_EXPENSE"


class PaymentMethod(str, Enum):
    """How a payment was made."""

    CASH = "CASH"
    CHEQUE = "CHEQUE"
    BANK_TRANSFER = "BANK_TRANSFER"
    MPESA = "MPESA"
    TIGO_PESA = "TIGO_PESA"
    AIRTEL_MONEY = "AIRTEL_MONEY"
    HALOPESA = "HALOPESA"
    CREDIT_CARD = "CREDIT_CARD"
    OTHER = "OTHER"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class _ReceiptRecord(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class Transaction(_ReceiptRecord):
    """A recorded income payment to be receipted."""

    transaction_number: str = Field(min_length=1, description="Unique receipt reference")
    category: TransactionCategory
    amount: Decimal = Field(ge=0, description="Amount received")
    payment_method: PaymentMethod
    transaction_date: date
    description: str | None = None
    reference_number: str | None = Field(None, description="External reference, e.g. bank slip")
    member_id: str | None = Field(None, description="Link to the paying member")

    @field_validator("description", "reference_number", "member_id", mode="before")
    @classmethod
    def blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("category", "payment_method", mode="before")
    @classmethod
    def upper_enum(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v


class Organization(_ReceiptRecord):
    """The issuing parish."""

    name: str = Field(min_length=1, validation_alias="parish_name")
    physical_address: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    logo_url: str | None = None
    currency_code: str | None = Field(None, description="ISO 4217 code; settings default if absent")
    locale: str | None = Field(None, description="Babel locale; settings default if absent")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator(
        "physical_address",
        "contact_phone",
        "contact_email",
        "logo_url",
        "currency_code",
        "locale",
        mode="before",
    )
    @classmethod
    def blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)


class Payer(_ReceiptRecord):
    """The member who made the payment."""

    first_name: str
    last_name: str
    member_code: str | None = None

    @field_validator("member_code", mode="before")
    @classmethod
    def blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


__all__ = [
    "TransactionCategory",
    "PaymentMethod",
    "Transaction",
    "Organization",
    "Payer",
]
