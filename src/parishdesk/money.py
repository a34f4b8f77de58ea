"""
Money and currency utilities using py-moneyed and Babel.

Provides currency handling with proper decimal precision
and locale-aware formatting for receipt amounts.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from babel import Locale
from babel.core import UnknownLocaleError
from babel.numbers import format_currency
from moneyed import Currency, Money, get_currency
from moneyed.classes import CurrencyDoesNotExist

from parishdesk.settings import CurrencyDisplay

# Default locale for formatting
DEFAULT_LOCALE = "en_TZ"

# ISO code in front, grouped, always two decimals: "TZS 12,345.50"
CODE_PATTERN = "¤¤ #,##0.00"
# Whole units for large aggregates: "TZS 12,346"
CODE_PATTERN_WHOLE = "¤¤ #,##0"


class MoneyHandler:
    """Central handler for money operations with proper error handling."""

    def __init__(self, default_currency: str = "TZS", default_locale: str = DEFAULT_LOCALE) -> None:
        self.default_currency = self._validate_currency(default_currency)
        self.default_locale = self._validate_locale(default_locale)

    def _validate_currency(self, currency_code: str) -> Currency:
        """Validate and return Currency object."""
        try:
            return get_currency(currency_code.upper())
        except CurrencyDoesNotExist:
            raise ValueError(f"Invalid currency code: {currency_code}")

    def _validate_locale(self, locale_code: str) -> str:
        """Validate locale code, falling back to the default locale."""
        try:
            Locale.parse(locale_code)
            return locale_code
        except (UnknownLocaleError, ValueError):
            return DEFAULT_LOCALE

    def create_money(
        self, amount: int | float | Decimal | str, currency: str | None = None
    ) -> Money:
        """Create Money object with proper validation."""
        currency = currency or self.default_currency.code
        validated_currency = self._validate_currency(currency)

        try:
            decimal_amount = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {amount!r}")

        return Money(amount=decimal_amount, currency=validated_currency)

    def format_money(
        self,
        money: Money,
        locale: str | None = None,
        display: CurrencyDisplay = CurrencyDisplay.CODE,
        whole_units: bool = False,
        **kwargs: Any,
    ) -> str:
        """Format Money object with locale-aware grouping.

        ``CurrencyDisplay.CODE`` always renders the ISO code followed by the
        amount; ``CurrencyDisplay.SYMBOL`` defers to the locale's own pattern.
        """
        validated_locale = self._validate_locale(locale or self.default_locale)

        if display == CurrencyDisplay.CODE:
            kwargs.setdefault("format", CODE_PATTERN_WHOLE if whole_units else CODE_PATTERN)
            kwargs.setdefault("currency_digits", False)
        elif whole_units:
            kwargs.setdefault("format", "¤#,##0")
            kwargs.setdefault("currency_digits", False)

        try:
            return format_currency(
                number=money.amount,
                currency=money.currency.code,
                locale=validated_locale,
                **kwargs,
            )
        except (TypeError, ValueError):
            # Fallback to simple formatting if locale issues
            places = Decimal(1) if whole_units else Decimal("0.01")
            return f"{money.currency.code} {money.amount.quantize(places):,}"


# Global instance for convenience
money_handler = MoneyHandler()


def create_money(amount: int | float | Decimal | str, currency: str = "TZS") -> Money:
    """Create Money object with default handler."""
    return money_handler.create_money(amount, currency)


def format_money(money: Money, locale: str | None = None, **kwargs: Any) -> str:
    """Format Money with default handler."""
    return money_handler.format_money(money, locale, **kwargs)


def format_amount(
    amount: int | float | Decimal | str,
    currency: str = "TZS",
    locale: str | None = None,
    display: CurrencyDisplay = CurrencyDisplay.CODE,
) -> str:
    """Create and format an amount in one step."""
    return money_handler.format_money(create_money(amount, currency), locale, display=display)


__all__ = [
    "MoneyHandler",
    "money_handler",
    "create_money",
    "format_money",
    "format_amount",
]
