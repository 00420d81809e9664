from __future__ import annotations

from datetime import date
from typing import Iterable, List

from .models import Buckets, ClassifiedEvent, Event
from .timeutil import days_between


def classify_event(event: Event, today: date) -> ClassifiedEvent:
    return ClassifiedEvent(event=event, days_offset=days_between(today, event.date))


def classify(events: Iterable[Event], today: date) -> Buckets:
    """Partition ``events`` relative to ``today``.

    Every event lands in exactly one bucket. Input order is kept inside each
    bucket; ordering for display is the presenter's job.
    """
    past: List[ClassifiedEvent] = []
    present: List[ClassifiedEvent] = []
    future: List[ClassifiedEvent] = []
    for event in events:
        classified = classify_event(event, today)
        if classified.days_offset < 0:
            past.append(classified)
        elif classified.days_offset == 0:
            present.append(classified)
        else:
            future.append(classified)
    return Buckets(past=tuple(past), today=tuple(present), future=tuple(future))
