"""
Submission record model.

The record is only built from data that already passed
Validator.validate_submission, so every field here is typed and required.
Raw request bodies stay plain mappings until then.
"""

from pydantic import BaseModel, ConfigDict, Field


class SubmissionRecord(BaseModel):
    """One complete Udyam registration attempt."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    aadhaar_number: str = Field(..., alias="aadhaarNumber")
    entrepreneur_name: str = Field(..., alias="entrepreneurName")
    consent: bool
    otp: str
    otp_verified: bool = Field(..., alias="otpVerified")
    organisation_type: str = Field(..., alias="organisationType")
    pan_number: str = Field(..., alias="panNumber")
    pan_holder_name: str = Field(..., alias="panHolderName")
    dob: str
    pan_consent: bool = Field(..., alias="panConsent")
    pincode: str
    state: str
    city: str

    def to_payload(self) -> dict[str, str | bool]:
        """Export with the camelCase keys used on the wire."""
        return self.model_dump(by_alias=True)


# Wire names in record order; validation errors are reported in this order.
SUBMISSION_FIELDS: tuple[str, ...] = tuple(
    info.alias or name for name, info in SubmissionRecord.model_fields.items()
)
