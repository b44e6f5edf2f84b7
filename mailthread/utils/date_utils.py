"""Date coercion for loosely typed message timestamps."""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def coerce_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce a message date into a timezone-aware datetime.

    Args:
        value: datetime, RFC 2822 string or ISO-8601 string

    Returns:
        Aware datetime (naive values are assumed UTC), or None when the
        value is of another type or cannot be parsed

    Examples:
        >>> coerce_datetime("2025-01-13T10:30:00+00:00").year
        2025
        >>> coerce_datetime(1736764200) is None
        True
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        parsed = _parse_date_string(value.strip())
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date_string(value: str) -> Optional[datetime]:
    """Try ISO-8601 first, then the RFC 2822 Date header format."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass

    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None


def sort_key(value: Any) -> datetime:
    """Sort key for message dates; unparseable dates sort first."""
    return coerce_datetime(value) or EPOCH
