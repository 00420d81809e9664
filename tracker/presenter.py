from __future__ import annotations

from typing import Iterable, List, Sequence

from .models import Buckets, ClassifiedEvent
from .timeutil import format_date

SECTION_TITLES = {
    "past": "Past:",
    "today": "Today:",
    "future": "Upcoming:",
}


def order_past(events: Iterable[ClassifiedEvent]) -> List[ClassifiedEvent]:
    # most recent first
    return sorted(events, key=lambda item: (-item.days_offset, item.event))


def order_future(events: Iterable[ClassifiedEvent]) -> List[ClassifiedEvent]:
    # soonest first
    return sorted(events, key=lambda item: (item.days_offset, item.event))


def describe_offset(days_offset: int) -> str:
    if days_offset == 0:
        return "today"
    magnitude = abs(days_offset)
    unit = "day" if magnitude == 1 else "days"
    if days_offset < 0:
        return f"{magnitude} {unit} ago"
    return f"in {magnitude} {unit}"


def format_event(item: ClassifiedEvent) -> str:
    event = item.event
    label = f"[{event.category}] {event.description}" if event.category else event.description
    return f"{format_date(event.date)}  {label}: {describe_offset(item.days_offset)}"


def _render_section(title: str, events: Sequence[ClassifiedEvent]) -> List[str]:
    if not events:
        return []
    return [title] + [f"  {format_event(item)}" for item in events]


def render(buckets: Buckets) -> List[str]:
    lines: List[str] = []
    lines.extend(_render_section(SECTION_TITLES["past"], order_past(buckets.past)))
    lines.extend(_render_section(SECTION_TITLES["today"], list(buckets.today)))
    lines.extend(_render_section(SECTION_TITLES["future"], order_future(buckets.future)))
    return lines
