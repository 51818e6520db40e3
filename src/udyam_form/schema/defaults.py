"""
Hand-authored default schemas.

These are the last resort of the schema provider and the fallback document
of the scraper, so every step here must have at least one field.
"""

from types import MappingProxyType

from udyam_form.errors import UnknownStepError
from udyam_form.models.field_definitions import (
    FieldValidation,
    FormField,
    FormOption,
    FormSchema,
)
from udyam_form.validation.patterns import DEFAULT_REGISTRY, Pattern, PatternRegistry

SUPPORTED_STEPS: tuple[int, ...] = (1, 2)

ORGANISATION_TYPES: tuple[tuple[str, str], ...] = (
    ("Proprietary", "proprietary"),
    ("Hindu Undivided Family", "huf"),
    ("Partnership", "partnership"),
    ("Co-Operative", "cooperative"),
    ("Private Limited Company", "private_limited"),
    ("Public Limited Company", "public_limited"),
    ("Self Help Group", "shg"),
    ("Limited Liability Partnership", "llp"),
    ("Society", "society"),
    ("Trust", "trust"),
    ("Others", "others"),
)


def _pattern_validation(pattern: Pattern, length: int, required: bool = True) -> FieldValidation:
    return FieldValidation(
        required=required,
        min_length=length,
        max_length=length,
        pattern=pattern.regex,
        help_text=pattern.help_text,
    )


def build_step1_schema(registry: PatternRegistry = DEFAULT_REGISTRY) -> FormSchema:
    return FormSchema(
        title="Udyam Registration - Step 1 (Aadhaar & OTP)",
        step=1,
        fields=[
            FormField(
                id="aadhaarNumber",
                name="aadhaarNumber",
                label="Aadhaar Number",
                placeholder="Enter 12-digit Aadhaar",
                type="tel",
                validation=_pattern_validation(registry.get_pattern("aadhaar"), 12),
            ),
            FormField(
                id="entrepreneurName",
                name="entrepreneurName",
                label="Name of Entrepreneur",
                placeholder="Name as per Aadhaar",
                type="text",
                validation=FieldValidation(required=True, min_length=1, max_length=100),
            ),
            FormField(
                id="consent",
                name="consent",
                label="I consent to the use of my Aadhaar number for Udyam Registration",
                type="checkbox",
                validation=FieldValidation(required=True),
            ),
            FormField(
                id="otp",
                name="otp",
                label="OTP",
                placeholder="Enter 6-digit OTP",
                type="otp",
                validation=_pattern_validation(registry.get_pattern("otp"), 6),
            ),
        ],
    )


def build_step2_schema(registry: PatternRegistry = DEFAULT_REGISTRY) -> FormSchema:
    return FormSchema(
        title="Udyam Registration - Step 2 (PAN Validation)",
        step=2,
        fields=[
            FormField(
                id="organisationType",
                name="organisationType",
                label="Type of Organisation",
                type="select",
                options=[FormOption(label=label, value=value) for label, value in ORGANISATION_TYPES],
                validation=FieldValidation(required=True),
            ),
            FormField(
                id="panNumber",
                name="panNumber",
                label="PAN Number",
                placeholder="ABCDE1234F",
                type="text",
                validation=_pattern_validation(registry.get_pattern("pan"), 10),
            ),
            FormField(
                id="panHolderName",
                name="panHolderName",
                label="Name of PAN Holder",
                placeholder="Name as per PAN",
                type="text",
                validation=FieldValidation(required=True, min_length=1, max_length=100),
            ),
            FormField(
                id="dob",
                name="dob",
                label="Date of Birth / Incorporation",
                type="date",
                validation=FieldValidation(required=True),
            ),
            FormField(
                id="panConsent",
                name="panConsent",
                label="I consent to the use of my PAN for Udyam Registration",
                type="checkbox",
                validation=FieldValidation(required=True),
            ),
            FormField(
                id="pincode",
                name="pincode",
                label="PIN Code",
                placeholder="6-digit PIN",
                type="tel",
                validation=_pattern_validation(registry.get_pattern("pincode"), 6, required=False),
            ),
            FormField(id="state", name="state", label="State", type="text"),
            FormField(id="city", name="city", label="City", type="text"),
        ],
    )


DEFAULT_SCHEMAS = MappingProxyType({
    1: build_step1_schema(),
    2: build_step2_schema(),
})


def get_default_schema(step: int) -> FormSchema:
    """Get the static schema for a step."""
    try:
        return DEFAULT_SCHEMAS[step]
    except KeyError:
        raise UnknownStepError(step) from None
