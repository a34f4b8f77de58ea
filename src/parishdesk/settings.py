"""Centralized configuration using pydantic-settings.

All configuration is loaded from environment variables and .env files.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CurrencyDisplay(str, Enum):
    """How the currency is shown next to an amount."""

    CODE = "code"
    SYMBOL = "symbol"


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For nested settings, use double underscore: RECEIPTS__DEFAULT_CURRENCY=KES
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    # ============================================================
    # Observability
    # ============================================================

    class ObservabilitySettings(BaseModel):
        """Logging configuration."""

        log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
        log_format: str = Field("json", description="Log format (json or console)")

        @field_validator("log_format")
        @classmethod
        def validate_log_format(cls, v: str) -> str:
            value = v.lower()
            if value not in {"json", "console"}:
                raise ValueError("log_format must be 'json' or 'console'")
            return value

    observability: ObservabilitySettings = ObservabilitySettings()  # type: ignore[call-arg]

    # ============================================================
    # Receipts
    # ============================================================

    class ReceiptSettings(BaseModel):
        """Receipt rendering configuration."""

        default_currency: str = Field(
            "TZS", description="ISO 4217 code used when a parish has none"
        )
        default_locale: str = Field("en_TZ", description="Babel locale used for number formatting")
        currency_display: CurrencyDisplay = Field(
            CurrencyDisplay.CODE, description="Show the ISO code or the locale symbol"
        )
        thank_you_message: str = Field(
            "Thank you for your generous contribution!", description="First footer line"
        )
        blessing_message: str = Field("God bless you abundantly.", description="Second footer line")
        logo_fetch_timeout: float | None = Field(
            None, description="Seconds to wait for a remote logo (None waits indefinitely)"
        )
        output_dir: Path = Field(Path("receipts"), description="Default directory for saved PDFs")

        @field_validator("default_currency")
        @classmethod
        def normalize_currency(cls, v: str) -> str:
            return v.strip().upper()

    receipts: ReceiptSettings = ReceiptSettings()  # type: ignore[call-arg]


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore
    return _settings


def reset_settings() -> None:
    """Reset settings (mainly for testing)."""
    global _settings
    _settings = None
