"""Calendar event grouping for display.

Raw events are one row per booked session or per block. Bookings that share
a time window, coach and package collapse into one group whose ``count`` is
the number of athletes; every block stays its own group.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from services.booking_service.pricing.errors import BookingValidationError

BLOCK_COLOR = "#E6E7DE"
DEFAULT_PALETTE = ("#DCE5AE", "#AED3E5", "#AEE5D3", "#E5DCAE")
NO_COACH = "No Coach"
BLOCKED_TIME = "Blocked Time"


@dataclass
class CalendarEvent:
    id: int
    date: date
    start_time: Optional[str]
    end_time: Optional[str]
    is_block: bool = False
    status: Optional[str] = None
    program_name: Optional[str] = None
    student_name: Optional[str] = None
    student_birthday: Optional[date] = None
    branch_name: Optional[str] = None
    sport_name: Optional[str] = None
    package_name: Optional[str] = None
    coach_name: Optional[str] = None
    package_id: Optional[int] = None
    coach_id: Optional[int] = None
    color: Optional[str] = None
    gender: Optional[str] = None


@dataclass
class GroupedEvent:
    key: str
    time: str
    coach_name: str
    package_id: int
    package_name: str
    program_name: str
    is_block: bool
    color: str = ""
    count: int = 0
    events: list[CalendarEvent] = field(default_factory=list)


def normalize_time(value: str) -> str:
    """Pad ``HH:mm`` to ``HH:mm:ss``."""
    return value if value.count(":") >= 2 else f"{value}:00"


def event_key(event: CalendarEvent) -> Optional[str]:
    """Grouping key, or None for events that cannot be placed on the calendar."""
    if not event.start_time or not event.end_time:
        return None
    if event.is_block:
        return f"block-{event.start_time}-{event.end_time}-{event.id}"
    if not event.package_id:
        return None
    return f"{event.start_time}-{event.end_time}-{event.coach_name}-{event.package_id}"


def _new_group(key: str, event: CalendarEvent) -> GroupedEvent:
    return GroupedEvent(
        key=key,
        time=f"{normalize_time(event.start_time)}-{normalize_time(event.end_time)}",
        coach_name=event.coach_name or NO_COACH,
        package_id=event.package_id or 0,
        package_name=BLOCKED_TIME if event.is_block else (event.package_name or ""),
        program_name=event.program_name or "",
        is_block=event.is_block,
    )


def resolve_color(group: GroupedEvent, index: int) -> str:
    if group.is_block:
        return BLOCK_COLOR
    configured = group.events[0].color if group.events else None
    return configured or DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)]


def group_events(events: Iterable[CalendarEvent]) -> list[GroupedEvent]:
    """Collapse raw events into display groups, in first-seen order."""
    groups: "OrderedDict[str, GroupedEvent]" = OrderedDict()
    for event in events:
        key = event_key(event)
        if key is None:
            continue
        group = groups.get(key)
        if group is None:
            group = groups[key] = _new_group(key, event)
        group.count += 1
        group.events.append(event)

    grouped = list(groups.values())
    for index, group in enumerate(grouped):
        group.color = resolve_color(group, index)
    return grouped


def group_events_by_day(
    events: Iterable[CalendarEvent],
) -> "OrderedDict[date, list[GroupedEvent]]":
    """Group each calendar day separately, days in ascending order."""
    by_day: dict[date, list[CalendarEvent]] = {}
    for event in events:
        by_day.setdefault(event.date, []).append(event)
    return OrderedDict(
        (day, group_events(by_day[day])) for day in sorted(by_day)
    )


def validate_calendar_range(start: Optional[date], end: Optional[date]) -> None:
    if start is None or end is None:
        raise BookingValidationError("Start and end dates are required")
    if start == end:
        raise BookingValidationError("Start and end dates cannot be the same")
    if start > end:
        raise BookingValidationError("Start date cannot be greater than end date")
