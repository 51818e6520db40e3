"""
Schema extraction from the live registration page.

The heuristics and step profiles are pure functions over HTML; the scraper
only adds the browser session around them.
"""

from udyam_form.extraction.heuristics import (
    discover_elements,
    extract_fields,
    infer_pattern,
    infer_validation,
    is_meaningful_label,
    resolve_label,
)
from udyam_form.extraction.steps import (
    STEP_PROFILES,
    StepProfile,
    apply_profile,
    build_step_schema,
    get_step_profile,
)

__all__ = [
    "discover_elements",
    "extract_fields",
    "infer_pattern",
    "infer_validation",
    "is_meaningful_label",
    "resolve_label",
    "STEP_PROFILES",
    "StepProfile",
    "apply_profile",
    "build_step_schema",
    "get_step_profile",
]
