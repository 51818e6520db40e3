"""
Validation result models.

Validation verdicts are values, not exceptions: a UI gets every invalid
field in one response.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ValidationErrorType(str, Enum):
    """Client-correctable error kinds."""

    MISSING_INPUT = "MissingInput"
    PATTERN_MISMATCH = "PatternMismatch"
    CONSENT_REQUIRED = "ConsentRequired"
    REQUIRED_FIELD_MISSING = "RequiredFieldMissing"
    VERIFICATION_REQUIRED = "VerificationRequired"
    FIELD_TOO_LONG = "FieldTooLong"


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_name: str = Field(..., description="Name of the field with error")
    error_type: ValidationErrorType = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    expected: Any | None = Field(default=None, description="Expected value/format")
    received: Any | None = Field(default=None, description="Received value")

    @property
    def path(self) -> list[str]:
        return [self.field_name]

    def to_detail(self) -> dict[str, Any]:
        """Convert to the shape returned by the submit endpoint."""
        return {
            "path": self.path,
            "field": self.field_name,
            "type": self.error_type.value,
            "message": self.message,
        }


class ValidationResult(BaseModel):
    """Result of a field or submission validation."""

    is_valid: bool = Field(..., description="Whether the data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Validated data if valid"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Non-blocking warnings"
    )

    @property
    def error(self) -> str | None:
        """Message of the first error, if any."""
        return self.errors[0].message if self.errors else None

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_errors(self, field_name: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.field_name == field_name]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field names to error messages."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            if error.field_name not in result:
                result[error.field_name] = []
            result[error.field_name].append(error.message)
        return result

    def to_details(self) -> list[dict[str, Any]]:
        return [e.to_detail() for e in self.errors]
