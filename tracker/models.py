from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import NamedTuple, Tuple


@dataclass(frozen=True, order=True, slots=True)
class Event:
    date: date
    category: str
    description: str


@dataclass(frozen=True, slots=True)
class ClassifiedEvent:
    event: Event
    days_offset: int

    @property
    def is_past(self) -> bool:
        return self.days_offset < 0

    @property
    def is_today(self) -> bool:
        return self.days_offset == 0

    @property
    def is_future(self) -> bool:
        return self.days_offset > 0


class Buckets(NamedTuple):
    past: Tuple[ClassifiedEvent, ...]
    today: Tuple[ClassifiedEvent, ...]
    future: Tuple[ClassifiedEvent, ...]

    def total(self) -> int:
        return len(self.past) + len(self.today) + len(self.future)
