"""
Constants for validation and sanitization.

Centralizes the markup-stripping patterns and the submission business
rules so that the validator and sanitizer stay data-driven.
"""

import re

# Markup removed from free text before persistence
SCRIPT_BLOCK_PATTERN = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE
)
JAVASCRIPT_URI_PATTERN = re.compile(r"javascript:", re.IGNORECASE)
EVENT_HANDLER_PATTERN = re.compile(r"\bon\w+\s*=", re.IGNORECASE)

STRIP_PATTERNS = (
    SCRIPT_BLOCK_PATTERN,
    JAVASCRIPT_URI_PATTERN,
    EVENT_HANDLER_PATTERN,
)

# Longest accepted entrepreneur / PAN holder name
MAX_NAME_LENGTH = 100

# Submission fields checked against a registry pattern: wire name -> pattern name
SUBMISSION_PATTERN_FIELDS = {
    "aadhaarNumber": "aadhaar",
    "otp": "otp",
    "panNumber": "pan",
    "pincode": "pincode",
}

# Submission free-text fields: wire name -> message when empty
SUBMISSION_TEXT_FIELDS = {
    "entrepreneurName": "Entrepreneur name is required",
    "organisationType": "Organisation type is required",
    "panHolderName": "PAN holder name is required",
    "dob": "Date of birth is required",
    "state": "State is required",
    "city": "City is required",
}

SUBMISSION_NAME_FIELDS = ("entrepreneurName", "panHolderName")

# Flags that must be literally True: wire name -> message
SUBMISSION_CONSENT_FLAGS = {
    "consent": "Consent is required",
    "panConsent": "PAN consent is required",
}

SUBMISSION_VERIFICATION_FLAGS = {
    "otpVerified": "OTP must be verified",
}
