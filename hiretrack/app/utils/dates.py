"""
UTC helpers. All timestamps are stored as naive UTC datetimes.
"""
from datetime import date, datetime, time, timezone

from hiretrack.app.core.exceptions import InvalidInput


def utcnow() -> datetime:
    """Current instant as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are taken to be UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_datetime(value, field: str = "date") -> datetime:
    """
    Parse an ISO-8601 string, date or datetime into naive UTC.
    Raises InvalidInput when the value is not a real point in time.
    """
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"Invalid {field}")
    raw = value.strip()
    # fromisoformat before 3.11 does not accept a trailing Z
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise InvalidInput(f"Invalid {field}: {value!r}") from None
    return to_utc_naive(parsed)


def isoformat_utc(value: datetime | None) -> str | None:
    """Serialize naive UTC as ISO-8601 with a Z suffix."""
    if value is None:
        return None
    return to_utc_naive(value).isoformat() + "Z"
