"""Half-open interval helpers shared by Python checks and SQL queries.

Two intervals ``[s1, e1)`` and ``[s2, e2)`` intersect iff ``s1 < e2`` and
``s2 < e1``. Intervals that only share an endpoint do not intersect.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Union
from dateutil import parser
from sqlalchemy import and_
from parkspot.errors import InvalidTimestampError

SECONDS_PER_HOUR = Decimal(3600)


def parse_timestamp(value: Union[datetime, str]) -> datetime:
    """Parse a timestamp and normalise it to naive UTC.

    Aware values are converted to UTC; naive values are taken as UTC already.
    """
    if isinstance(value, str):
        try:
            value = parser.isoparse(value)
        except (ValueError, OverflowError):
            raise InvalidTimestampError(f"Invalid timestamp: {value!r}")
    elif not isinstance(value, datetime):
        raise InvalidTimestampError(f"Invalid timestamp: {value!r}")

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def intervals_overlap(s1: datetime, e1: datetime, s2: datetime, e2: datetime) -> bool:
    return s1 < e2 and s2 < e1


def overlap_clause(start_column, end_column, start: datetime, end: datetime):
    """SQL form of :func:`intervals_overlap` against a stored interval."""
    return and_(start_column < end, start < end_column)


def duration_hours(start: datetime, end: datetime) -> Decimal:
    delta = end - start
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    return seconds / SECONDS_PER_HOUR
