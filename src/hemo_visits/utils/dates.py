"""Date conversions between form values and backend timestamps."""

from datetime import date, datetime, timezone

from hemo_visits.utils.exceptions import ValidationError


def parse_calendar_date(value: str) -> date:
    """Parse a calendar date from a form value or a backend timestamp.

    Plain ``YYYY-MM-DD`` values are taken as-is. Timestamps are reduced to
    their UTC calendar date; timestamps without an offset are read as UTC.

    Args:
        value: Date or ISO-8601 timestamp string

    Returns:
        The calendar date

    Raises:
        ValidationError: If the value is not a date or timestamp

    Example:
        >>> parse_calendar_date("2024-03-15T22:30:00-05:00")
        datetime.date(2024, 3, 16)
    """
    text = value.strip()
    try:
        if "T" not in text and " " not in text:
            return date.fromisoformat(text)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}. Expected YYYY-MM-DD.") from e

    if parsed.tzinfo is None:
        return parsed.date()
    return parsed.astimezone(timezone.utc).date()


def to_iso_timestamp(day: date) -> str:
    """Normalize a calendar date to a UTC midnight timestamp.

    Example:
        >>> to_iso_timestamp(date(2024, 1, 1))
        '2024-01-01T00:00:00.000Z'
    """
    return f"{day.isoformat()}T00:00:00.000Z"


def format_local_date(day: date) -> str:
    """Format a date the way the clinic's notes record it (M/D/YYYY).

    Example:
        >>> format_local_date(date(2024, 3, 15))
        '3/15/2024'
    """
    return f"{day.month}/{day.day}/{day.year}"
