"""
Sanitizer for free-text values.

Runs before persistence, not before format validation: injected markup that
breaks a pattern must still be rejected as a format error.
"""

import html
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from udyam_form.validation.constants import STRIP_PATTERNS

RecordT = TypeVar("RecordT", Mapping[str, Any], BaseModel)


def contains_markup(value: str) -> bool:
    """Check whether a value carries any of the stripped markup patterns."""
    return any(pattern.search(value) for pattern in STRIP_PATTERNS)


def sanitize_text(value: str, escape_html: bool = True) -> str:
    """
    Strip script blocks, ``javascript:`` prefixes and ``on*=`` handlers.

    Removal alone can leave half a tag behind (``John<img alert(1)>``), so
    the remainder is HTML-entity encoded unless ``escape_html`` is False.
    """
    for pattern in STRIP_PATTERNS:
        value = pattern.sub("", value)
    value = value.strip()
    if escape_html:
        value = html.escape(value, quote=True)
    return value


def sanitize(record: RecordT, escape_html: bool = True) -> RecordT:
    """
    Sanitize every string value of a record.

    Non-string values pass through unchanged. A pydantic model comes back as
    a new instance of the same model; a mapping comes back as a dict.
    """
    if isinstance(record, BaseModel):
        updates = {
            name: sanitize_text(value, escape_html=escape_html)
            for name, value in record
            if isinstance(value, str)
        }
        return record.model_copy(update=updates)

    return {
        key: sanitize_text(value, escape_html=escape_html) if isinstance(value, str) else value
        for key, value in record.items()
    }
