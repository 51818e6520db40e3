"""
Validation subsystem: pattern registry, validator and sanitizer.
"""

from udyam_form.validation.patterns import (
    DEFAULT_REGISTRY,
    Pattern,
    PatternRegistry,
)
from udyam_form.validation.sanitizer import (
    contains_markup,
    sanitize,
    sanitize_text,
)
from udyam_form.validation.validator import (
    Validator,
    validate_field,
    validate_submission,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "Pattern",
    "PatternRegistry",
    "Validator",
    "validate_field",
    "validate_submission",
    "contains_markup",
    "sanitize",
    "sanitize_text",
]
