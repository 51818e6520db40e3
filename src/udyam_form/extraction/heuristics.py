"""
Field inference heuristics over a loaded form page.

Everything here works on the page HTML parsed with BeautifulSoup, so it can
run on a live page snapshot or on a saved file. The heuristics are
best-effort: the host page has no stable ids, so labels and validation
rules are guessed from attributes and nearby text.
"""

import re

from bs4 import BeautifulSoup, Tag

from udyam_form.extraction.constants import (
    EMAIL_HELP_TEXT,
    EMAIL_PATTERN,
    EXCLUDED_INPUT_TYPES,
    FRAMEWORK_MARKERS,
    INPUT_TYPE_ALIASES,
    MIN_LABEL_LENGTH,
)
from udyam_form.models.field_definitions import (
    FieldType,
    FieldValidation,
    FormField,
    FormOption,
)
from udyam_form.validation.patterns import DEFAULT_REGISTRY, PatternRegistry

# camelCase / ASP.NET control names -> lower-case words ("txtPanNo" -> txt, pan, no)
_NAME_TOKEN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
_PAN_TEXT = re.compile(r"\bPAN\b", re.IGNORECASE)
_PIN_TEXT = re.compile(r"\bPIN\b|\bpin\s*code\b|\bpincode\b", re.IGNORECASE)
_STOP_PARENTS = {"body", "html", "[document]"}


def _clean(text: str | None) -> str:
    return " ".join(text.split()) if text else ""


def _attr(element: Tag, name: str) -> str:
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def _text_of(element: Tag) -> str:
    return _clean(element.get_text(" "))


def _positive_int(value: str) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _name_tokens(value: str) -> set[str]:
    return {token.lower() for token in _NAME_TOKEN.findall(value)}


def element_kind(element: Tag) -> str:
    """Raw input kind: the type attribute, or the tag name for select/textarea."""
    if element.name in ("select", "textarea"):
        return element.name
    return (_attr(element, "type") or "text").lower()


def normalize_kind(raw_kind: str) -> FieldType:
    return INPUT_TYPE_ALIASES.get(raw_kind, "text")


def discover_elements(soup: BeautifulSoup) -> list[Tag]:
    """All input/select/textarea elements that can hold user data, in document order."""
    return [
        element
        for element in soup.find_all(["input", "select", "textarea"])
        if element_kind(element) not in EXCLUDED_INPUT_TYPES
    ]


def resolve_label(element: Tag, soup: BeautifulSoup) -> str:
    """
    Resolve the display label of a form element.

    Priority, first non-empty wins:
    1. <label for="..."> pointing at the element id
    2. nearest preceding sibling element with text
    3. nearest ancestor with exactly one child element and some text
    4. placeholder, then name, then id attribute
    """
    element_id = _attr(element, "id")
    if element_id:
        label = soup.find("label", attrs={"for": element_id})
        if label is not None:
            text = _text_of(label)
            if text:
                return text

    for sibling in element.previous_siblings:
        if isinstance(sibling, Tag):
            text = _text_of(sibling)
            if text:
                return text

    for parent in element.parents:
        if parent.name in _STOP_PARENTS:
            break
        children = [child for child in parent.children if isinstance(child, Tag)]
        if len(children) == 1:
            text = _text_of(parent)
            if text:
                return text

    for attribute in ("placeholder", "name", "id"):
        value = _attr(element, attribute)
        if value:
            return value
    return ""


def is_meaningful_label(label: str) -> bool:
    """Drop empty, too-short and framework-generated labels."""
    if not label or len(label) < MIN_LABEL_LENGTH:
        return False
    return not any(marker in label for marker in FRAMEWORK_MARKERS)


def infer_pattern(
    kind: str,
    name: str,
    placeholder: str,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> tuple[str, str] | None:
    """
    Guess a (regex, help text) pair from the input kind and surrounding text.

    When several rules apply, PIN code beats PAN, PAN beats the telephone
    rules, and those beat the email rule.
    """
    tokens = _name_tokens(name)
    lowered = placeholder.lower()

    if "pincode" in tokens or "pin" in tokens or _PIN_TEXT.search(placeholder):
        pattern = registry.get_pattern("pincode")
        return pattern.regex, pattern.help_text
    if "pan" in tokens or _PAN_TEXT.search(placeholder):
        pattern = registry.get_pattern("pan")
        return pattern.regex, pattern.help_text
    if kind == "tel" and "aadhaar" in lowered:
        pattern = registry.get_pattern("aadhaar")
        return pattern.regex, pattern.help_text
    if kind == "tel" and "mobile" in lowered:
        pattern = registry.get_pattern("mobile")
        return pattern.regex, pattern.help_text
    if kind == "email":
        return EMAIL_PATTERN, EMAIL_HELP_TEXT
    return None


def infer_validation(
    element: Tag,
    kind: str,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> FieldValidation:
    """Collect validation rules from attributes, then from heuristics."""
    rules: dict = {}
    if element.has_attr("required"):
        rules["required"] = True

    max_length = _positive_int(_attr(element, "maxlength"))
    if max_length is not None:
        rules["max_length"] = max_length
    min_length = _positive_int(_attr(element, "minlength"))
    if min_length is not None:
        rules["min_length"] = min_length

    explicit_pattern = element.get("pattern")
    if explicit_pattern:
        rules["pattern"] = explicit_pattern
    else:
        inferred = infer_pattern(kind, _attr(element, "name"), _attr(element, "placeholder"), registry)
        if inferred is not None:
            rules["pattern"], rules["help_text"] = inferred

    return FieldValidation(**rules)


def _select_options(element: Tag) -> list[FormOption]:
    options = []
    for option in element.find_all("option"):
        label = _text_of(option)
        value = option.get("value")
        options.append(FormOption(label=label, value=label if value is None else value))
    return options


def build_field(
    element: Tag,
    index: int,
    soup: BeautifulSoup,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> FormField | None:
    """Turn one element into a FormField, or None if its label is not usable."""
    label = resolve_label(element, soup)
    if not is_meaningful_label(label):
        return None

    kind = normalize_kind(element_kind(element))
    element_id = _attr(element, "id")
    validation = infer_validation(element, kind, registry)

    return FormField(
        id=element_id or f"field_{index}",
        name=_attr(element, "name") or element_id or f"field_{index}",
        label=label,
        placeholder=_attr(element, "placeholder") or None,
        type=kind,
        options=_select_options(element) if element.name == "select" else None,
        validation=None if validation.is_empty() else validation,
    )


def extract_fields(
    html: str | BeautifulSoup,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> list[FormField]:
    """
    Extract every usable field from a page, in document order.

    Args:
        html: Page HTML, or an already parsed soup.
        registry: Patterns used by the validation heuristics.

    Returns:
        List of FormField; elements without a meaningful label are dropped.
    """
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")
    fields = []
    for index, element in enumerate(discover_elements(soup)):
        field = build_field(element, index, soup, registry)
        if field is not None:
            fields.append(field)
    return fields
