"""
Report period validation.

A period is a {startDate, endDate} mapping of YYYY-MM-DD strings.

Dependencies: None (pure domain layer)
System role: Input rules for report generation
"""

from typing import Any

from spacecat_api.core.validators import ISO_DATE_PATTERN, has_text, parse_calendar_date


def validate_period(period: Any, label: str) -> str | None:
    """
    Check a report period.

    Args:
        period: Candidate period mapping
        label: Human label used in messages ("Report period")

    Returns:
        str | None: Error message, or None when the period is valid
    """
    if not isinstance(period, dict) or not period:
        return f"{label} is required"

    start = period.get("startDate")
    end = period.get("endDate")
    if not has_text(start):
        return f"{label} start date is required"
    if not has_text(end):
        return f"{label} end date is required"

    bounds = (("start", start), ("end", end))
    for name, value in bounds:
        if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
            return f"{label} {name} date must be in YYYY-MM-DD format"

    parsed = {}
    for name, value in bounds:
        parsed[name] = parse_calendar_date(value)
        if parsed[name] is None:
            return f"{label} {name} date is not a valid date"

    if parsed["start"] > parsed["end"]:
        return f"{label} start date must be less than or equal to end date"
    return None


def periods_equal(first: dict | None, second: dict | None) -> bool:
    first = first or {}
    second = second or {}
    return (
        first.get("startDate") == second.get("startDate")
        and first.get("endDate") == second.get("endDate")
    )
