"""
Per-step extraction profiles.

The live page renders several steps' worth of inputs at once, so each step
keeps only the fields relevant to it, puts its primary field first and caps
the count. A step whose filter leaves nothing falls back to its static
default document rather than publishing an empty schema.
"""

import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from udyam_form.errors import UnknownStepError
from udyam_form.extraction.heuristics import extract_fields
from udyam_form.models.field_definitions import FormField, FormSchema
from udyam_form.schema.defaults import get_default_schema
from udyam_form.validation.patterns import DEFAULT_REGISTRY, PatternRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepProfile:
    """Relevance filter for one registration step."""

    step: int
    title: str
    keywords: tuple[re.Pattern[str], ...] = field(default_factory=tuple)
    primary: str | None = None
    max_fields: int = 20

    def is_relevant(self, form_field: FormField) -> bool:
        if not self.keywords:
            return True
        text = f"{form_field.label} {form_field.placeholder or ''}".lower()
        return any(keyword.search(text) for keyword in self.keywords)

    def is_primary(self, form_field: FormField) -> bool:
        if not self.primary:
            return False
        return re.search(rf"\b{re.escape(self.primary)}\b", form_field.label.lower()) is not None


STEP_PROFILES: dict[int, StepProfile] = {
    1: StepProfile(
        step=1,
        title="Udyam Registration (scraped)",
        max_fields=20,
    ),
    2: StepProfile(
        step=2,
        title="Udyam Registration (scraped)",
        keywords=(
            re.compile(r"\bpan\b"),
            re.compile(r"pin\s*code|pincode"),
            re.compile(r"state"),
            re.compile(r"city|district"),
        ),
        primary="pan",
        max_fields=6,
    ),
}


def get_step_profile(step: int) -> StepProfile:
    try:
        return STEP_PROFILES[step]
    except KeyError:
        raise UnknownStepError(step) from None


def apply_profile(fields: list[FormField], profile: StepProfile) -> list[FormField]:
    """Filter, order (primary first, otherwise stable) and cap extracted fields."""
    relevant = [f for f in fields if profile.is_relevant(f)]
    relevant.sort(key=lambda f: 0 if profile.is_primary(f) else 1)
    return relevant[: profile.max_fields]


def build_step_schema(
    html: str | BeautifulSoup,
    step: int,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> FormSchema:
    """
    Build the schema document for ``step`` from page HTML.

    Returns the step's static default when no relevant field survives.
    """
    profile = get_step_profile(step)
    extracted = extract_fields(html, registry)
    fields = apply_profile(extracted, profile)
    logger.info(
        f"Step {step}: {len(extracted)} fields extracted, {len(fields)} kept after relevance filter"
    )
    if not fields:
        logger.warning(f"Step {step}: no relevant fields found, using the static default schema")
        return get_default_schema(step)
    return FormSchema(title=profile.title, step=step, fields=fields)
