from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from daycount_logging import get_logger

from .timeutil import DateLike, as_date, days_between, parse_date

DEFAULT_MILESTONE = 1000


@dataclass(frozen=True)
class BirthdayNote:
    age_days: int
    is_birthday: bool
    is_milestone: bool

    def lines(self) -> List[str]:
        lines = [f"You are {self.age_days} days old."]
        if self.is_birthday:
            lines.append("Happy birthday!")
        if self.is_milestone:
            lines.append(f"Today is day {self.age_days}, a round number!")
        return lines


def parse_birthdate(raw: Optional[str]) -> Optional[date]:
    """Return the configured birthdate, or None when it is unset or unusable.

    A malformed value is logged and otherwise ignored so the rest of the run proceeds.
    """
    if raw is None or not raw.strip():
        return None
    try:
        return parse_date(raw)
    except ValueError as exc:
        get_logger(__name__).warning("birthday.invalid_birthdate", value=raw, error=str(exc))
        return None


def is_birthday(birthdate: date, today: date) -> bool:
    return (today.month, today.day) == (birthdate.month, birthdate.day)


def annotate(birthdate: date, now: DateLike, milestone: int = DEFAULT_MILESTONE) -> BirthdayNote:
    today = as_date(now)
    age_days = days_between(birthdate, today)
    return BirthdayNote(
        age_days=age_days,
        is_birthday=is_birthday(birthdate, today),
        is_milestone=milestone > 0 and age_days > 0 and age_days % milestone == 0,
    )
