"""Timestamp helpers for the FIAP wire format (RFC 3339 text)."""

from __future__ import annotations

from datetime import datetime, timezone


def is_zero_time(dt: datetime) -> bool:
    """Return True for the zero-value timestamp 0001-01-01T00:00:00."""
    return dt.replace(tzinfo=None) == datetime.min


def format_time(dt: datetime) -> str:
    """Format an aware datetime as RFC 3339 with second precision.

    UTC is written as ``Z``; other offsets as ``+HH:MM``.

    Examples:
        >>> format_time(datetime(2012, 2, 2, 16, 34, 5, tzinfo=timezone.utc))
        '2012-02-02T16:34:05Z'
    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError(f"timestamp must be timezone-aware: {dt!r}")
    text = dt.isoformat(timespec="seconds")
    if dt.utcoffset().total_seconds() == 0 and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, requiring an explicit offset.

    Raises:
        ValueError: If the text is not RFC 3339 or carries no offset
    """
    stripped = text.strip()
    if "T" not in stripped and "t" not in stripped:
        raise ValueError(f'parsing time "{text}": missing date/time separator')
    try:
        dt = datetime.fromisoformat(stripped)
    except ValueError as exc:
        raise ValueError(f'parsing time "{text}": {exc}') from exc
    if dt.tzinfo is None:
        raise ValueError(f'parsing time "{text}": missing timezone offset')
    return dt


__all__ = ["format_time", "is_zero_time", "parse_time"]
