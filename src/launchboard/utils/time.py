"""Time utilities for UTC timestamp parsing and formatting."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_utc(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp into a timezone-aware UTC datetime.

    Accepts the API's 'Z' suffix ("2006-03-24T22:30:00.000Z") as well as
    explicit offsets. Naive timestamps are taken to be UTC.

    Args:
        value: ISO 8601 string, or None/blank

    Returns:
        UTC datetime, or None when value is None or blank

    Raises:
        ValueError: If value is not a parseable ISO 8601 timestamp
    """
    if value is None or not value.strip():
        return None

    dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with Z suffix.

    Args:
        dt: Datetime object (must be timezone-aware)

    Returns:
        ISO 8601 UTC timestamp ending with 'Z' (e.g., '2006-03-24T22:30:00Z')

    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )

    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat().replace('+00:00', 'Z')
