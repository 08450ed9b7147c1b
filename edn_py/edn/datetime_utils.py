"""EDN instant (``#inst``) parsing and formatting utilities."""

from datetime import datetime, timedelta, timezone

from edn_py.exceptions import EDNLiteralError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# strptime fallbacks for forms fromisoformat rejects
_FALLBACK_FORMATS = [
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
]


def parse_datetime(value: str) -> datetime:
    """Parse an RFC 3339 / ISO 8601 instant string.

    Supports the ``Z`` suffix, ``-00:00`` and any other numeric offset, and
    fractional seconds of any precision up to microseconds.

    Args:
        value: The instant text, as found inside ``#inst "..."``.

    Returns:
        A timezone-aware datetime. Instants without an offset are taken
        to be UTC.

    Raises:
        EDNLiteralError: If the text is not a recognizable instant.
    """
    normalized = value.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    if normalized.endswith("-00:00"):
        normalized = normalized[:-6] + "+00:00"

    try:
        dt = datetime.fromisoformat(normalized)
    except ValueError:
        dt = None

    if dt is None:
        for fmt in _FALLBACK_FORMATS:
            try:
                dt = datetime.strptime(normalized, fmt)
                break
            except ValueError:
                continue
        else:
            raise EDNLiteralError(f"Invalid #inst instant: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_instant(dt: datetime) -> str:
    """Format a datetime as the text of an ``#inst`` literal.

    Aware datetimes are converted to UTC, naive ones are taken to be UTC.
    Millisecond precision is used unless the value carries sub-millisecond
    digits.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    timespec = "milliseconds" if dt.microsecond % 1000 == 0 else "microseconds"
    return dt.replace(tzinfo=None).isoformat(timespec=timespec) + "Z"


def to_epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch, truncated toward negative infinity."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def from_epoch_millis(millis: int) -> datetime:
    """Inverse of :func:`to_epoch_millis`, returning a UTC datetime."""
    return _EPOCH + timedelta(milliseconds=millis)
