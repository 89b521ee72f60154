"""Small input checks shared across services."""

import re

from clubsite.domain.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    """Return True for addresses shaped like local@domain.tld."""
    return bool(EMAIL_PATTERN.match(value))


def require_text(value: object, label: str) -> str:
    """Return the stripped text or raise when it is missing."""
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{label} is required")
    return text
