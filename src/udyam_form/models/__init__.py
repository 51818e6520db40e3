"""
Data models for the Udyam form backend.

This module contains Pydantic models for:
- Form schemas (fields, options, validation constraints)
- The submission record
- Validation results
"""

from udyam_form.models.field_definitions import (
    FIELD_TYPES,
    FieldType,
    FieldValidation,
    FormField,
    FormOption,
    FormSchema,
)
from udyam_form.models.submission import (
    SUBMISSION_FIELDS,
    SubmissionRecord,
)
from udyam_form.models.validation_result import (
    FieldValidationError,
    ValidationErrorType,
    ValidationResult,
)

__all__ = [
    # Schema
    "FIELD_TYPES",
    "FieldType",
    "FieldValidation",
    "FormField",
    "FormOption",
    "FormSchema",
    # Submission
    "SUBMISSION_FIELDS",
    "SubmissionRecord",
    # Validation
    "FieldValidationError",
    "ValidationErrorType",
    "ValidationResult",
]
