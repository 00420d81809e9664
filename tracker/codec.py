from __future__ import annotations

from typing import List, Sequence, Tuple

from .errors import RowError
from .models import Event
from .timeutil import format_date, parse_date

HEADER: Tuple[str, ...] = ("date", "category", "description")


def decode_row(fields: Sequence[str]) -> Event:
    """Map one CSV row onto an :class:`Event`.

    Raises :class:`RowError` when the row cannot be used. The error is meant to be
    reported and skipped by the caller, never to abort a whole load.
    """
    if len(fields) != len(HEADER):
        description = fields[-1] if len(fields) > 1 else None
        raise RowError(RowError.FIELD_COUNT, str(len(fields)), description)

    raw_date, category, description = fields
    try:
        event_date = parse_date(raw_date)
    except ValueError as exc:
        raise RowError(RowError.INVALID_DATE, raw_date, description or None) from exc

    if not description.strip():
        raise RowError(RowError.MISSING_DESCRIPTION, raw_date)

    return Event(date=event_date, category=category, description=description)


def encode_row(event: Event) -> List[str]:
    return [format_date(event.date), event.category, event.description]
