from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional, Union

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import DateComputationError

DATE_PATTERN = re.compile(r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})")

DateLike = Union[date, datetime]


def get_timezone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def now_local(timezone: Optional[str] = None) -> datetime:
    try:
        if timezone:
            return datetime.now(get_timezone(timezone))
        return datetime.now()
    except (OSError, OverflowError, ValueError, ZoneInfoNotFoundError) as exc:
        raise DateComputationError(f"cannot read the current time: {exc}") from exc


def today(timezone: Optional[str] = None) -> date:
    return now_local(timezone).date()


def as_date(value: DateLike) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole calendar days from ``start`` to ``end``; negative when ``end`` is earlier.

    Time of day and tzinfo are discarded before differencing.
    """
    return (as_date(end) - as_date(start)).days


def parse_date(text: str) -> date:
    match = DATE_PATTERN.fullmatch(text.strip())
    if not match:
        raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
    return date(
        int(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
    )


def format_date(value: date) -> str:
    return value.isoformat()
