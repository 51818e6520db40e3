"""Tests for Udyam form data models."""

import pytest
from pydantic import ValidationError

from udyam_form.models.field_definitions import (
    FIELD_TYPES,
    FieldValidation,
    FormField,
    FormOption,
    FormSchema,
)
from udyam_form.models.submission import SUBMISSION_FIELDS, SubmissionRecord
from udyam_form.models.validation_result import (
    FieldValidationError,
    ValidationErrorType,
    ValidationResult,
)


def _record_payload(**overrides):
    payload = {
        "aadhaarNumber": "234567890123",
        "entrepreneurName": "Asha Rao",
        "consent": True,
        "otp": "123456",
        "otpVerified": True,
        "organisationType": "proprietary",
        "panNumber": "ABCDE1234F",
        "panHolderName": "Asha Rao",
        "dob": "1990-04-12",
        "panConsent": True,
        "pincode": "560011",
        "state": "Karnataka",
        "city": "Bengaluru",
    }
    payload.update(overrides)
    return payload


class TestFieldValidation:
    """Tests for FieldValidation model."""

    def test_accepts_camel_case_aliases(self):
        """Test constructing from the wire document keys."""
        validation = FieldValidation.model_validate(
            {"required": True, "minLength": 6, "maxLength": 6, "helpText": "6 digits"}
        )
        assert validation.min_length == 6
        assert validation.max_length == 6
        assert validation.help_text == "6 digits"

    def test_accepts_field_names(self):
        """Test constructing with Python field names."""
        validation = FieldValidation(max_length=10)
        assert validation.max_length == 10

    def test_is_empty(self):
        """Test detecting an unconstrained validation block."""
        assert FieldValidation().is_empty()
        assert not FieldValidation(required=False).is_empty()

    def test_negative_length_rejected(self):
        """Test that lengths must be non-negative."""
        with pytest.raises(ValidationError):
            FieldValidation(min_length=-1)


class TestFormField:
    """Tests for FormField model."""

    def test_defaults(self):
        """Test a field with only the required attributes."""
        field = FormField(id="city", name="city", label="City")
        assert field.type == "text"
        assert field.options is None
        assert field.required is False

    def test_required_property(self):
        """Test that required reads from the validation block."""
        field = FormField(
            id="pan",
            name="panNumber",
            label="PAN",
            validation=FieldValidation(required=True),
        )
        assert field.required is True

    def test_unknown_type_rejected(self):
        """Test that only the supported field kinds are accepted."""
        with pytest.raises(ValidationError):
            FormField(id="x", name="x", label="X", type="color")

    def test_supported_kinds(self):
        """Test the closed set of field kinds."""
        assert set(FIELD_TYPES) == {
            "text", "number", "select", "radio", "checkbox",
            "date", "tel", "email", "password", "otp",
        }

    def test_frozen(self):
        """Test that fields cannot be mutated after construction."""
        field = FormField(id="city", name="city", label="City")
        with pytest.raises(ValidationError):
            field.label = "Town"


class TestFormSchema:
    """Tests for FormSchema model."""

    def test_step_must_be_positive(self):
        """Test that step numbers start at 1."""
        with pytest.raises(ValidationError):
            FormSchema(title="Bad", step=0)

    def test_field_lookup(self):
        """Test looking fields up by name."""
        schema = FormSchema(
            title="Test",
            step=1,
            fields=[
                FormField(id="a", name="alpha", label="Alpha"),
                FormField(id="b", name="beta", label="Beta"),
            ],
        )
        assert schema.field_names() == ["alpha", "beta"]
        assert schema.get_field("beta").label == "Beta"
        assert schema.get_field("gamma") is None

    def test_document_export(self):
        """Test the JSON document uses camelCase keys and omits unset values."""
        schema = FormSchema(
            title="Test",
            step=2,
            fields=[
                FormField(
                    id="orgType",
                    name="organisationType",
                    label="Type of Organisation",
                    type="select",
                    options=[FormOption(label="Trust", value="trust")],
                    validation=FieldValidation(required=True, max_length=20, help_text="Pick one"),
                ),
            ],
        )
        document = schema.to_document()
        field = document["fields"][0]
        assert document["step"] == 2
        assert field["validation"] == {"required": True, "maxLength": 20, "helpText": "Pick one"}
        assert field["options"] == [{"label": "Trust", "value": "trust"}]
        assert "placeholder" not in field

    def test_document_parses_back(self):
        """Test that an exported document is accepted as input."""
        schema = FormSchema(
            title="Test",
            step=1,
            fields=[
                FormField(
                    id="otp",
                    name="otp",
                    label="OTP",
                    type="otp",
                    validation=FieldValidation(min_length=6),
                )
            ],
        )
        assert FormSchema.model_validate(schema.to_document()) == schema


class TestSubmissionRecord:
    """Tests for SubmissionRecord model."""

    def test_from_wire_payload(self):
        """Test building a record from camelCase keys."""
        record = SubmissionRecord.model_validate(_record_payload())
        assert record.aadhaar_number == "234567890123"
        assert record.pan_consent is True

    def test_payload_uses_wire_names(self):
        """Test exporting back to camelCase keys."""
        payload = _record_payload()
        assert SubmissionRecord.model_validate(payload).to_payload() == payload

    def test_field_order(self):
        """Test the declared wire field order."""
        assert SUBMISSION_FIELDS[0] == "aadhaarNumber"
        assert SUBMISSION_FIELDS[-1] == "city"
        assert len(SUBMISSION_FIELDS) == 13

    def test_missing_field_rejected(self):
        """Test that every field is required."""
        payload = _record_payload()
        del payload["city"]
        with pytest.raises(ValidationError):
            SubmissionRecord.model_validate(payload)


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_valid_result(self):
        """Test valid validation result."""
        result = ValidationResult(
            is_valid=True,
            validated_data={"pan": "ABCDE1234F"},
        )
        assert result.is_valid
        assert result.error_count == 0
        assert result.error is None

    def test_invalid_result(self):
        """Test invalid validation result with errors."""
        result = ValidationResult(
            is_valid=False,
            errors=[
                FieldValidationError(
                    field_name="panNumber",
                    error_type=ValidationErrorType.PATTERN_MISMATCH,
                    message="Invalid PAN format. Expected: ABCDE1234F",
                ),
            ],
        )
        assert not result.is_valid
        assert result.error_count == 1
        assert result.error == "Invalid PAN format. Expected: ABCDE1234F"
        assert len(result.get_field_errors("panNumber")) == 1

    def test_error_dict_conversion(self):
        """Test converting errors to dict format."""
        result = ValidationResult(
            is_valid=False,
            errors=[
                FieldValidationError(
                    field_name="consent",
                    error_type=ValidationErrorType.CONSENT_REQUIRED,
                    message="Consent is required",
                ),
                FieldValidationError(
                    field_name="city",
                    error_type=ValidationErrorType.REQUIRED_FIELD_MISSING,
                    message="City is required",
                ),
            ],
        )
        assert result.to_error_dict() == {
            "consent": ["Consent is required"],
            "city": ["City is required"],
        }

    def test_details_shape(self):
        """Test the per-error detail entries returned by the API."""
        error = FieldValidationError(
            field_name="otpVerified",
            error_type=ValidationErrorType.VERIFICATION_REQUIRED,
            message="OTP must be verified",
        )
        assert error.to_detail() == {
            "path": ["otpVerified"],
            "field": "otpVerified",
            "type": "VerificationRequired",
            "message": "OTP must be verified",
        }
