"""
Field and submission validator.

Format-only checks: a value that matches its pattern is accepted without any
checksum or registry lookup.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from udyam_form.models.submission import SUBMISSION_FIELDS, SubmissionRecord
from udyam_form.models.validation_result import (
    FieldValidationError,
    ValidationErrorType,
    ValidationResult,
)
from udyam_form.validation.constants import (
    MAX_NAME_LENGTH,
    SUBMISSION_CONSENT_FLAGS,
    SUBMISSION_NAME_FIELDS,
    SUBMISSION_PATTERN_FIELDS,
    SUBMISSION_TEXT_FIELDS,
    SUBMISSION_VERIFICATION_FLAGS,
)
from udyam_form.validation.patterns import DEFAULT_REGISTRY, PatternRegistry


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


class Validator:
    """
    Validates single identity fields and whole submissions.

    Usage:
        validator = Validator()

        result = validator.validate("pan", "ABCDE1234F")
        assert result.is_valid

        result = validator.validate_submission(payload)
        for error in result.errors:
            print(error.field_name, error.message)
    """

    def __init__(self, registry: PatternRegistry = DEFAULT_REGISTRY):
        self.registry = registry

    def validate(
        self,
        kind: str,
        raw_value: Any,
        required: bool = True,
        field_name: str | None = None,
    ) -> ValidationResult:
        """
        Validate one raw value against the pattern registered for ``kind``.

        Args:
            kind: Pattern name ("aadhaar", "pan", "mobile", "otp", "pincode").
            raw_value: The value as received; it is not trimmed or coerced.
            required: Whether an absent/empty value is an error.
            field_name: Name reported in errors (defaults to ``kind``).

        Returns:
            ValidationResult with at most one error.

        Raises:
            UnknownPatternError: If ``kind`` is not registered.
        """
        pattern = self.registry.get_pattern(kind)
        field_name = field_name or kind

        if _is_blank(raw_value):
            if not required:
                return ValidationResult(is_valid=True)
            return ValidationResult(
                is_valid=False,
                errors=[
                    FieldValidationError(
                        field_name=field_name,
                        error_type=ValidationErrorType.MISSING_INPUT,
                        message=pattern.missing_message,
                    )
                ],
            )

        if not isinstance(raw_value, str) or not pattern.matches(raw_value):
            return ValidationResult(
                is_valid=False,
                errors=[
                    FieldValidationError(
                        field_name=field_name,
                        error_type=ValidationErrorType.PATTERN_MISMATCH,
                        message=pattern.message,
                        expected=pattern.example,
                        received=raw_value,
                    )
                ],
            )

        return ValidationResult(is_valid=True, validated_data={field_name: raw_value})

    def validate_submission(self, data: Mapping[str, Any] | BaseModel) -> ValidationResult:
        """
        Validate a complete submission, collecting every field error.

        Errors are ordered by record field order so a UI can highlight all
        invalid fields at once.
        """
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True)

        errors: list[FieldValidationError] = []
        for name in SUBMISSION_FIELDS:
            error = self._check_submission_field(name, data.get(name))
            if error is not None:
                errors.append(error)

        if errors:
            return ValidationResult(is_valid=False, errors=errors)

        record = SubmissionRecord.model_validate({name: data[name] for name in SUBMISSION_FIELDS})
        return ValidationResult(is_valid=True, validated_data=record.to_payload())

    def _check_submission_field(self, name: str, value: Any) -> FieldValidationError | None:
        if name in SUBMISSION_PATTERN_FIELDS:
            if _is_blank(value):
                pattern = self.registry.get_pattern(SUBMISSION_PATTERN_FIELDS[name])
                return FieldValidationError(
                    field_name=name,
                    error_type=ValidationErrorType.REQUIRED_FIELD_MISSING,
                    message=pattern.missing_message,
                )
            result = self.validate(SUBMISSION_PATTERN_FIELDS[name], value, field_name=name)
            return result.errors[0] if result.errors else None

        if name in SUBMISSION_TEXT_FIELDS:
            if not isinstance(value, str) or not value.strip():
                return FieldValidationError(
                    field_name=name,
                    error_type=ValidationErrorType.REQUIRED_FIELD_MISSING,
                    message=SUBMISSION_TEXT_FIELDS[name],
                    received=value,
                )
            if name in SUBMISSION_NAME_FIELDS and len(value) > MAX_NAME_LENGTH:
                return FieldValidationError(
                    field_name=name,
                    error_type=ValidationErrorType.FIELD_TOO_LONG,
                    message="Name too long",
                    expected=f"at most {MAX_NAME_LENGTH} characters",
                )
            return None

        # Flags must be the boolean True itself, not a truthy string or 1
        if name in SUBMISSION_CONSENT_FLAGS and value is not True:
            return FieldValidationError(
                field_name=name,
                error_type=ValidationErrorType.CONSENT_REQUIRED,
                message=SUBMISSION_CONSENT_FLAGS[name],
                expected=True,
                received=value,
            )
        if name in SUBMISSION_VERIFICATION_FLAGS and value is not True:
            return FieldValidationError(
                field_name=name,
                error_type=ValidationErrorType.VERIFICATION_REQUIRED,
                message=SUBMISSION_VERIFICATION_FLAGS[name],
                expected=True,
                received=value,
            )
        return None


default_validator = Validator()


def validate_field(kind: str, raw_value: Any, required: bool = True) -> ValidationResult:
    """Validate one value with the default registry."""
    return default_validator.validate(kind, raw_value, required=required)


def validate_submission(data: Mapping[str, Any] | BaseModel) -> ValidationResult:
    """Validate a submission with the default registry."""
    return default_validator.validate_submission(data)
