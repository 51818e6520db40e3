"""
Pattern registry for identity fields.

The regular expressions are shared with client code that encodes the same
rules independently, so they must stay exactly as written here.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from udyam_form.errors import UnknownPatternError


@dataclass(frozen=True)
class Pattern:
    """A named regular expression plus the messages shown to users."""

    name: str
    regex: str
    label: str
    message: str
    help_text: str
    example: str
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.regex))

    @property
    def missing_message(self) -> str:
        return f"{self.label} is required"

    def matches(self, value: str) -> bool:
        """Whole-string match; no surrounding whitespace is tolerated."""
        return self._compiled.fullmatch(value) is not None


class PatternRegistry(Mapping[str, Pattern]):
    """Immutable name -> Pattern table."""

    def __init__(self, patterns: list[Pattern]) -> None:
        self._patterns = MappingProxyType({p.name: p for p in patterns})

    def __getitem__(self, name: str) -> Pattern:
        return self.get_pattern(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def get_pattern(self, name: str) -> Pattern:
        try:
            return self._patterns[name]
        except KeyError:
            raise UnknownPatternError(name) from None

    def names(self) -> list[str]:
        return list(self._patterns)


AADHAAR = Pattern(
    name="aadhaar",
    regex=r"^[2-9][0-9]{11}$",
    label="Aadhaar number",
    message="Invalid Aadhaar format. Must be 12 digits starting with 2-9",
    help_text="Aadhaar number must be 12 digits starting with 2-9",
    example="234567890123",
)

PAN = Pattern(
    name="pan",
    regex=r"^[A-Z]{5}[0-9]{4}[A-Z]{1}$",
    label="PAN number",
    message="Invalid PAN format. Expected: ABCDE1234F",
    help_text="PAN must be in format: ABCDE1234F",
    example="ABCDE1234F",
)

MOBILE = Pattern(
    name="mobile",
    regex=r"^[6-9][0-9]{9}$",
    label="Mobile number",
    message="Invalid mobile number format. Must be 10 digits starting with 6-9",
    help_text="Mobile number must be 10 digits starting with 6-9",
    example="9876543210",
)

OTP = Pattern(
    name="otp",
    regex=r"^[0-9]{6}$",
    label="OTP",
    message="Invalid OTP format. Must be 6 digits",
    help_text="OTP must be 6 digits",
    example="123456",
)

PINCODE = Pattern(
    name="pincode",
    regex=r"^[0-9]{6}$",
    label="PIN code",
    message="Invalid PIN code format. Must be 6 digits",
    help_text="PIN code must be 6 digits",
    example="560011",
)

DEFAULT_REGISTRY = PatternRegistry([AADHAAR, PAN, MOBILE, OTP, PINCODE])
