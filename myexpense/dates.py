"""Date utilities for myexpense.

Pure functions for ISO date validation, month bucketing and labels.
"""

from datetime import date, datetime, timedelta

from myexpense.domain.models import Month


def is_iso_date(value: str) -> bool:
    """Check that a string is a well-formed YYYY-MM-DD calendar date.

    Args:
        value: Candidate date string.

    Returns:
        True if the string is exactly ten characters and a real date.
    """
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def month_key(iso_date: str) -> Month:
    """Return the YYYY-MM bucket of an ISO date."""
    return Month(iso_date[:7])


def iso_date_days_ago(days: int, today: date | None = None) -> str:
    """Get the ISO date a number of days before today.

    Args:
        days: Days to go back.
        today: Reference date. If None, uses the current date.

    Returns:
        Date in YYYY-MM-DD format.
    """
    if today is None:
        today = date.today()
    return (today - timedelta(days=days)).isoformat()


def month_label(month: Month) -> str:
    """Human-readable label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Label such as "January 2025".

    Raises:
        ValueError: If the month is malformed.
    """
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")
