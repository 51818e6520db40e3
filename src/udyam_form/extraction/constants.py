"""
Constants for schema extraction.
"""

# Input kinds that never become form fields
EXCLUDED_INPUT_TYPES = frozenset({"hidden", "button", "submit", "image", "reset"})

# Scraped input types mapped onto the field kinds the schema supports
INPUT_TYPE_ALIASES = {
    "text": "text",
    "search": "text",
    "url": "text",
    "textarea": "text",
    "number": "number",
    "select": "select",
    "select-one": "select",
    "radio": "radio",
    "checkbox": "checkbox",
    "date": "date",
    "datetime-local": "date",
    "tel": "tel",
    "email": "email",
    "password": "password",
    "otp": "otp",
}

# Hidden-state markers of the legacy ASP.NET host page
FRAMEWORK_MARKERS = (
    "__VIEWSTATE",
    "__VIEWSTATEGENERATOR",
    "__EVENTVALIDATION",
    "__EVENTTARGET",
    "__EVENTARGUMENT",
)

MIN_LABEL_LENGTH = 3

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
EMAIL_HELP_TEXT = "Enter a valid email address"

# Chromium flags for container/CI runs
BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]
