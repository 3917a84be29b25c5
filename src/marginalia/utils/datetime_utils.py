"""Date and time utilities."""

from __future__ import annotations

from datetime import UTC, date, datetime, tzinfo
from typing import Any

from dateutil import parser as dateutil_parser


def parse_datetime_flexible(value: datetime | date | str | Any, *, default_timezone: tzinfo = UTC) -> datetime:
    """Parse a front-matter date value into an aware ``datetime``.

    Args:
        value: Datetime-like input. PyYAML already turns most timestamps into
            ``date``/``datetime`` objects; anything else is parsed as a string
            with ``dateutil``.
        default_timezone: Timezone attached to naive values. Explicit offsets
            are kept as written.

    Returns:
        A timezone-aware ``datetime``.

    Raises:
        ValueError: if the input is empty or cannot be parsed.

    """
    return localize(_to_datetime(value), default_timezone=default_timezone)


def _to_datetime(value: Any) -> datetime:
    if value is None:
        msg = "date cannot be empty"
        raise ValueError(msg)

    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())

    raw = str(value).strip()
    if not raw:
        msg = "date cannot be empty"
        raise ValueError(msg)

    try:
        return dateutil_parser.parse(raw)
    except (TypeError, ValueError, OverflowError) as e:
        msg = f"could not parse date {raw!r}"
        raise ValueError(msg) from e


def localize(dt: datetime, *, default_timezone: tzinfo = UTC) -> datetime:
    """Attach ``default_timezone`` to a naive datetime; aware values pass through."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=default_timezone)
    return dt


__all__ = ["localize", "parse_datetime_flexible"]
