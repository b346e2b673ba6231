"""Shared query parameter parsing utilities."""

from datetime import datetime

from services.exceptions import InvalidDateFormatError


def parse_datetime(value: str | None, name: str) -> datetime | None:
    """Parse an ISO 8601 timestamp query parameter.

    A bare ``YYYY-MM-DD`` is accepted as midnight. Naive values are later
    treated as UTC.

    Args:
        value: Raw query string value, or None.
        name: Parameter name, used in the error message.

    Returns:
        The parsed datetime, or None if the parameter is absent.

    Raises:
        InvalidDateFormatError: If the value is not an ISO 8601 timestamp.
    """
    if value is None or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidDateFormatError(
            f"Invalid {name} format: {value}. Use ISO 8601, e.g. 2025-09-01T00:00:00Z"
        )
