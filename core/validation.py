"""Input validation helpers for contact details."""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# (555) 123-4567, 555-123-4567, 555.123.4567, 5551234567
PHONE_PATTERN = re.compile(r"^\(?([0-9]{3})\)?[-. ]?([0-9]{3})[-. ]?([0-9]{4})$")


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_PATTERN.match(email))


def is_valid_phone(phone: str) -> bool:
    return bool(phone and PHONE_PATTERN.match(phone))
