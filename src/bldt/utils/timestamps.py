"""Timestamp parsing and formatting.

Two textual forms are used: ISO-8601 with a UTC offset in the on-disk records
and RFC 1123 in HTTP headers. Both always produce timezone-aware datetimes.
"""

import re
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime

# Region suffix appended by some ISO writers, e.g. "...+09:00[Asia/Tokyo]".
_REGION_SUFFIX = re.compile(r"\[[^\[\]]+\]$")


def parse_iso(value: str) -> datetime:
    """Parse a zoned ISO-8601 timestamp.

    A trailing ``[Region/Name]`` suffix is accepted and ignored; the offset
    is authoritative.

    Raises:
        ValueError: If *value* is not ISO-8601 or carries no UTC offset.
    """
    text = _REGION_SUFFIX.sub("", value)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ValueError(f"timestamp has no UTC offset: {value!r}")
    return parsed


def format_iso(value: datetime) -> str:
    """Format a timezone-aware datetime as ISO-8601 with offset."""
    return value.isoformat()


def parse_http_date(value: str) -> datetime:
    """Parse an RFC 1123 HTTP date (e.g. ``Last-Modified``).

    Raises:
        ValueError: If *value* is not a valid HTTP date.
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, IndexError) as e:
        raise ValueError(f"not an HTTP date: {value!r}") from e
    if parsed.tzinfo is None:
        # "-0000" means UTC with unknown local zone
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_http_date(value: datetime) -> str:
    """Format a timezone-aware datetime as an RFC 1123 HTTP date in GMT."""
    return format_datetime(value.astimezone(UTC), usegmt=True)


def now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()
