"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from parishdesk.settings import CurrencyDisplay, Settings, get_settings, reset_settings


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = get_settings()

        assert settings.receipts.default_currency == "TZS"
        assert settings.receipts.default_locale == "en_TZ"
        assert settings.receipts.currency_display is CurrencyDisplay.CODE
        assert settings.receipts.logo_fetch_timeout is None
        assert settings.receipts.output_dir == Path("receipts")

    def test_sections(self):
        assert set(Settings.model_fields) == {"observability", "receipts"}

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_nested_environment_override(self, monkeypatch):
        monkeypatch.setenv("RECEIPTS__DEFAULT_CURRENCY", "kes")
        monkeypatch.setenv("RECEIPTS__CURRENCY_DISPLAY", "symbol")
        monkeypatch.setenv("OBSERVABILITY__LOG_FORMAT", "CONSOLE")
        reset_settings()

        settings = get_settings()

        assert settings.receipts.default_currency == "KES"
        assert settings.receipts.currency_display is CurrencyDisplay.SYMBOL
        assert settings.observability.log_format == "console"

    def test_invalid_log_format(self):
        with pytest.raises(ValueError):
            Settings.ObservabilitySettings(log_format="xml")
