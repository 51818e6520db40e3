"""
Field and form schema models.

A FormSchema describes one registration step: a title, the step number and
the ordered list of fields the UI should render. Schemas come either from
the hand-authored defaults or from the scraper, and are read-only once built.
"""

from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

FieldType = Literal[
    "text",
    "number",
    "select",
    "radio",
    "checkbox",
    "date",
    "tel",
    "email",
    "password",
    "otp",
]

FIELD_TYPES: tuple[str, ...] = get_args(FieldType)


class FormOption(BaseModel):
    """A (label, value) choice for select/radio fields."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class FieldValidation(BaseModel):
    """
    Optional constraints for a field.

    Every attribute is optional; absence means "unconstrained".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    required: bool | None = Field(default=None, description="Whether a value must be given")
    min_length: int | None = Field(default=None, alias="minLength", ge=0)
    max_length: int | None = Field(default=None, alias="maxLength", ge=0)
    pattern: str | None = Field(default=None, description="Regex source")
    help_text: str | None = Field(default=None, alias="helpText")

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.required, self.min_length, self.max_length, self.pattern, self.help_text)
        )


class FormField(BaseModel):
    """Schema for a single form field."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="DOM identifier")
    name: str = Field(..., description="Programmatic field name")
    label: str = Field(..., description="Human-readable label")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    type: FieldType = Field(default="text", description="Input kind")
    options: list[FormOption] | None = Field(default=None, description="Choices for select/radio")
    validation: FieldValidation | None = Field(default=None)

    @property
    def required(self) -> bool:
        return bool(self.validation and self.validation.required)


class FormSchema(BaseModel):
    """Form schema for one registration step."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Form title")
    step: int = Field(..., ge=1, description="Registration step number")
    fields: list[FormField] = Field(default_factory=list, description="Ordered fields")

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> FormField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def to_document(self) -> dict[str, Any]:
        """Export as the JSON document served over HTTP and written to the cache."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
