"""Display formatting helpers.

Pure functions that turn amounts, timestamps and status values into the
strings the dashboards show. Every time-dependent helper takes an explicit
``now`` so output is deterministic under test.

Examples:
    format_currency(2500)                         → "$2,500"
    format_date("2024-10-20T14:30:00Z")           → "Oct 20, 2024"
    format_datetime("2024-10-20T14:30:00Z")       → "Oct 20, 2024, 02:30 PM"
    format_file_size(245760)                      → "240 KB"
"""

import math
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Timestamp = Union[str, date, datetime]
Amount = Union[int, float, Decimal]

FILE_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")

# Badge variants understood by the UI kit
STATUS_VARIANTS = {
    "completed": "default",
    "in_progress": "secondary",
    "assigned": "outline",
    "pending": "destructive",
}

PRIORITY_VARIANTS = {
    "emergency": "destructive",
    "high": "secondary",
    "medium": "outline",
    "low": "outline",
}

PROPERTY_STATUS_VARIANTS = {
    "occupied": "default",
    "vacant": "secondary",
    "maintenance": "destructive",
}

ROLE_THEMES = {
    "property_manager": "blue",
    "tenant": "green",
    "service_provider": "orange",
}


# =============================================================================
# Timestamps
# =============================================================================

def to_datetime(value: Timestamp) -> datetime:
    """Coerce an ISO string, date or datetime into an aware UTC datetime.

    Naive values are taken to be UTC, matching how the fixtures are written.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_date(value: Timestamp) -> str:
    """Format as a short US date, e.g. ``Oct 20, 2024``."""
    dt = to_datetime(value)
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_datetime(value: Timestamp) -> str:
    """Format as a short US date with 12-hour time, e.g. ``Oct 20, 2024, 02:30 PM``."""
    dt = to_datetime(value)
    return f"{format_date(dt)}, {dt:%I:%M %p}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def relative_time(value: Timestamp, now: Optional[datetime] = None) -> str:
    """Describe how long ago a timestamp was.

    Under a minute is "Just now"; under a week is counted in minutes, hours
    or days; anything older falls back to :func:`format_date`.
    """
    dt = to_datetime(value)
    reference = to_datetime(now) if now is not None else utcnow()
    seconds = math.floor((reference - dt).total_seconds())

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return _plural(seconds // 60, "minute")
    if seconds < 86400:
        return _plural(seconds // 3600, "hour")
    if seconds < 604800:
        return _plural(seconds // 86400, "day")
    return format_date(dt)


def first_of_next_month(now: Optional[datetime] = None) -> date:
    """Rent due date: the first day of the month after ``now``."""
    reference = to_datetime(now) if now is not None else utcnow()
    if reference.month == 12:
        return date(reference.year + 1, 1, 1)
    return date(reference.year, reference.month + 1, 1)


# =============================================================================
# Amounts
# =============================================================================

def format_currency(amount: Optional[Amount]) -> str:
    """Format a dollar amount with no cents, e.g. ``$2,500`` or ``-$200``."""
    if amount is None:
        amount = 0
    value = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(int(value)):,}"


def format_file_size(size: int) -> str:
    """Format a byte count using 1024-based units, e.g. ``153.11 KB``."""
    if size < 0:
        raise ValueError("File size cannot be negative")
    if size == 0:
        return "0 Bytes"

    index = min(int(math.floor(math.log(size) / math.log(1024))), len(FILE_SIZE_UNITS) - 1)
    scaled = f"{size / math.pow(1024, index):.2f}".rstrip("0").rstrip(".")
    return f"{scaled} {FILE_SIZE_UNITS[index]}"


# =============================================================================
# Text
# =============================================================================

def capitalize(text: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    return text[:1].upper() + text[1:].lower()


def capitalize_words(text: str) -> str:
    """Capitalize every whitespace-separated word."""
    return " ".join(capitalize(word) for word in text.split(" "))


def humanize_status(value: str) -> str:
    """``in_progress`` → ``In Progress``."""
    return capitalize_words(_enum_value(value).replace("_", " "))


# =============================================================================
# Badges
# =============================================================================

def _enum_value(value) -> str:
    return getattr(value, "value", value)


def status_variant(status) -> str:
    return STATUS_VARIANTS.get(_enum_value(status), "outline")


def priority_variant(priority) -> str:
    return PRIORITY_VARIANTS.get(_enum_value(priority), "outline")


def property_status_variant(status) -> str:
    return PROPERTY_STATUS_VARIANTS.get(_enum_value(status), "outline")


def role_theme(role) -> str:
    """Primary accent colour for a role's dashboard."""
    return ROLE_THEMES.get(_enum_value(role), "gray")
