"""
MCP Tool definitions for the Udyam form backend.

Exposes schema resolution and validation to MCP clients, so an assistant
can fetch the form for a step and check values before submitting.
"""

import logging
from typing import Any

from udyam_form.errors import UnknownPatternError, UnknownStepError
from udyam_form.schema.provider import SchemaProvider
from udyam_form.validation.validator import Validator, default_validator

logger = logging.getLogger("udyam-form-mcp")


async def mcp_get_form_schema(
    step: int,
    provider: SchemaProvider | None = None,
) -> dict[str, Any]:
    """
    Resolve the form schema for a registration step.

    Args:
        step: Registration step number (1 or 2).
        provider: Schema provider; defaults to one built from the configuration.

    Returns:
        {"source": "remote" | "cache" | "static", "schema": {...}}, or
        {"error": ...} for an unknown step.
    """
    provider = provider or SchemaProvider.from_config()
    try:
        schema, source = await provider.resolve(step)
    except UnknownStepError as e:
        return {"error": e.message}
    logger.info(f"Resolved step {step} schema from '{source}'")
    return {"source": source, "schema": schema.to_document()}


def mcp_validate_field(
    kind: str,
    value: Any,
    validator: Validator = default_validator,
) -> dict[str, Any]:
    """
    Check one identity value (aadhaar, pan, mobile, otp, pincode) against its pattern.
    """
    try:
        result = validator.validate(kind, value)
    except UnknownPatternError as e:
        return {"valid": False, "error": e.message, "known_kinds": validator.registry.names()}
    if result.is_valid:
        return {"valid": True}
    return {"valid": False, "error": result.error, "type": result.errors[0].error_type.value}


def mcp_validate_submission(
    record: dict[str, Any],
    validator: Validator = default_validator,
) -> dict[str, Any]:
    """
    Validate a full submission without storing it.

    Returns:
        {"valid": True, "data": {...}} or {"valid": False, "details": [...]}.
    """
    if not isinstance(record, dict):
        return {"valid": False, "error": "record must be an object"}
    result = validator.validate_submission(record)
    if result.is_valid:
        return {"valid": True, "data": result.validated_data}
    return {"valid": False, "details": result.to_details()}


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "get_form_schema",
            "description": """
Get the Udyam registration form schema for a step.

Step 1 collects Aadhaar, entrepreneur name, consent and OTP.
Step 2 collects organisation type, PAN details, date of birth, PAN consent
and the address PIN code, state and city.

The result names the source that answered (remote, cache or static) and the
schema document with each field's type, label and validation rules.
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "step": {
                        "type": "integer",
                        "description": "Registration step number",
                        "enum": [1, 2],
                    },
                },
                "required": ["step"],
            },
        },
        {
            "name": "validate_field",
            "description": "Check the format of one identity value: aadhaar, pan, mobile, otp or pincode.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "kind": {
                        "type": "string",
                        "enum": ["aadhaar", "pan", "mobile", "otp", "pincode"],
                    },
                    "value": {
                        "type": "string",
                        "description": "Value exactly as entered; it is not trimmed",
                    },
                },
                "required": ["kind", "value"],
            },
        },
        {
            "name": "validate_submission",
            "description": """
Validate a complete registration without storing it.

Returns every invalid field at once. Consent flags and otpVerified must be
the boolean true.
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "record": {
                        "type": "object",
                        "description": "Submission with camelCase keys (aadhaarNumber, panNumber, ...)",
                    },
                },
                "required": ["record"],
            },
        },
    ]
