"""
Primitive value validators.

Dependencies: None (pure domain layer)
System role: Shared input checks for all controllers
"""

import re
import uuid
from datetime import date, datetime
from typing import Any
from urllib.parse import urlparse

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_uuid(value: Any) -> bool:
    """Whether value is a canonical UUID string."""
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False


def has_text(value: Any) -> bool:
    """Whether value is a string with at least one non-space character."""
    return isinstance(value, str) and value.strip() != ""


def is_non_empty_object(value: Any) -> bool:
    return isinstance(value, dict) and len(value) > 0


def is_non_empty_array(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def is_iso_date(value: Any) -> bool:
    """
    Whether value is an ISO 8601 timestamp or date string.

    Args:
        value: Candidate value

    Returns:
        bool: True when datetime.fromisoformat accepts it
    """
    if not has_text(value):
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def parse_iso_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def parse_calendar_date(value: str) -> date | None:
    """Parse YYYY-MM-DD, returning None for impossible dates like 2024-02-30."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def is_valid_url(value: Any) -> bool:
    """Whether value is an absolute http(s) URL with a host."""
    if not has_text(value):
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_integer(value: Any) -> bool:
    """Whether value is an int, or a string holding one."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        return re.fullmatch(r"-?\d+", value.strip()) is not None
    return False
