"""
clock.py — Injectable wall clock + timestamp normalisation.

Every policy component takes a `clock` callable so tests can freeze time.
Values read back from the store go through to_instant() at the adapter
boundary, so policy code only ever sees timezone-aware UTC datetimes.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def to_instant(value: Any) -> Optional[datetime]:
    """
    Normalise a stored timestamp into an aware UTC datetime.

    Accepts aware or naive datetimes (naive = UTC, which is what pymongo
    returns by default), plain dates (UTC midnight), ISO-8601 strings and
    epoch seconds. Anything else, including unparseable strings, maps to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        try:
            # "Z" suffix is only accepted by fromisoformat from 3.11 on
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
        return to_instant(parsed)
    return None
