"""
Custom exceptions for the Udyam form backend.

Client-correctable problems (bad Aadhaar, missing consent, ...) are not
exceptions: they are reported as ValidationResult values. The classes here
cover operational failures that callers recover from locally, plus lookups
of things that do not exist.
"""

from typing import Any


class UdyamFormError(Exception):
    """Base exception for all udyam_form errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Operational errors (recovered by a fallback)
# =============================================================================


class ExtractionUnavailable(UdyamFormError):
    """A scraped schema could not be produced, fetched or read."""

    pass


class SinkUnavailable(UdyamFormError):
    """The persistence sink is not configured or refused the record."""

    pass


class LookupUnavailable(UdyamFormError):
    """The external PIN code lookup service could not be reached."""

    pass


# =============================================================================
# Lookup errors
# =============================================================================


class UnknownStepError(UdyamFormError, LookupError):
    """Requested a registration step that has no schema."""

    def __init__(self, step: int) -> None:
        super().__init__(f"Unknown step: {step}", {"step": step})
        self.step = step


class UnknownPatternError(UdyamFormError, KeyError):
    """Requested a pattern name that is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown pattern: {name}", {"name": name})
        self.name = name

    def __str__(self) -> str:
        return self.message
