"""
Receipt generation exceptions.

Invalid input is a caller bug and fails fast; optional assets (logos) and
display surfaces never raise, they degrade instead.
"""

from typing import Any


class ReceiptError(Exception):
    """
    Base receipt error with context.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context data about the error
        recovery_hint: Suggested action to resolve the error
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recovery_hint: str | None = None,
    ):
        self.message = message
        self.error_code = error_code or "RECEIPT_ERROR"
        self.context = context or {}
        self.recovery_hint = recovery_hint
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "recovery_hint": self.recovery_hint,
        }


class InvalidReceiptArgument(ReceiptError, ValueError):
    """A required receipt input is missing or malformed."""

    def __init__(
        self,
        message: str,
        argument: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        context: dict[str, Any] = {"argument": argument}
        if errors:
            context["errors"] = errors
        super().__init__(
            message,
            "INVALID_RECEIPT_ARGUMENT",
            context=context,
            recovery_hint=f"Supply a valid {argument} when requesting a receipt",
        )


class UnknownReceiptFormat(InvalidReceiptArgument):
    """The format selector does not name a known preset."""

    def __init__(self, value: object, allowed: list[str]) -> None:
        super().__init__(f"Unknown receipt format: {value!r}", "format")
        self.error_code = "UNKNOWN_RECEIPT_FORMAT"
        self.context["allowed"] = allowed
        self.recovery_hint = f"Use one of: {', '.join(allowed)}"


__all__ = [
    "ReceiptError",
    "InvalidReceiptArgument",
    "UnknownReceiptFormat",
]
