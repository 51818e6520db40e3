"""
Udyam Form: backend for the Udyam (MSME) registration form.

Serves the form schema for each registration step, validates identity
fields and complete submissions, and optionally stores accepted records.

Simple Usage:
    from udyam_form import validate_field, validate_submission

    result = validate_field("pan", "ABCDE1234F")
    assert result.is_valid

    result = validate_submission(payload)
    for error in result.errors:
        print(error.field_name, error.message)

Schema Resolution:
    from udyam_form import SchemaProvider

    provider = SchemaProvider.from_config()
    schema, source = await provider.resolve(2)  # remote -> cache -> static

HTTP API:
    from udyam_form.api import create_app, run_server

    run_server()  # serves on UDYAM_SERVER_HOST:PORT

Scraping:
    from udyam_form.extraction.scraper import FormExtractor

    schema, path = await FormExtractor().extract_to_cache(step=1)
"""

from udyam_form.errors import (
    ExtractionUnavailable,
    LookupUnavailable,
    SinkUnavailable,
    UdyamFormError,
    UnknownPatternError,
    UnknownStepError,
)
from udyam_form.models import (
    FieldValidation,
    FieldValidationError,
    FormField,
    FormOption,
    FormSchema,
    SubmissionRecord,
    ValidationErrorType,
    ValidationResult,
)
from udyam_form.schema import SchemaProvider, get_default_schema
from udyam_form.validation import (
    DEFAULT_REGISTRY,
    Pattern,
    PatternRegistry,
    Validator,
    sanitize,
    sanitize_text,
    validate_field,
    validate_submission,
)

__all__ = [
    # Errors
    "UdyamFormError",
    "ExtractionUnavailable",
    "SinkUnavailable",
    "LookupUnavailable",
    "UnknownStepError",
    "UnknownPatternError",
    # Schema models
    "FieldValidation",
    "FormField",
    "FormOption",
    "FormSchema",
    # Submission / validation models
    "SubmissionRecord",
    "ValidationErrorType",
    "ValidationResult",
    "FieldValidationError",
    # Patterns and validation
    "DEFAULT_REGISTRY",
    "Pattern",
    "PatternRegistry",
    "Validator",
    "validate_field",
    "validate_submission",
    "sanitize",
    "sanitize_text",
    # Schema resolution
    "SchemaProvider",
    "get_default_schema",
]

__version__ = "0.1.0"
