"""
Tests for money formatting.
"""

from decimal import Decimal

import pytest

from parishdesk.money import MoneyHandler, create_money, format_amount, format_money
from parishdesk.settings import CurrencyDisplay


@pytest.mark.unit
class TestFormatAmount:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("12345.5"), "TZS 12,345.50"),
            (0, "TZS 0.00"),
            ("1000000", "TZS 1,000,000.00"),
            (Decimal("0.005"), "TZS 0.00"),
        ],
    )
    def test_code_display(self, amount, expected):
        assert format_amount(amount, "TZS", "en_TZ") == expected

    def test_other_currency(self):
        assert format_amount("2500", "KES", "en_KE") == "KES 2,500.00"

    def test_symbol_display(self):
        formatted = format_amount("12345.5", "TZS", "en_TZ", display=CurrencyDisplay.SYMBOL)

        assert "12,345" in formatted
        assert not formatted.startswith("TZS")

    def test_whole_units(self):
        money = create_money("12345.5", "TZS")

        assert format_money(money, "en_TZ", whole_units=True) == "TZS 12,346"


@pytest.mark.unit
class TestMoneyHandler:
    def test_default_currency(self):
        handler = MoneyHandler(default_currency="kes")

        assert handler.create_money(5).currency.code == "KES"

    def test_invalid_currency(self):
        with pytest.raises(ValueError, match="Invalid currency code"):
            MoneyHandler().create_money(1, "XYZ")

    def test_invalid_amount(self):
        with pytest.raises(ValueError, match="Invalid amount"):
            MoneyHandler().create_money("ten")

    def test_unknown_locale_falls_back(self):
        handler = MoneyHandler(default_locale="xx_YY")

        assert handler.default_locale == "en_TZ"
