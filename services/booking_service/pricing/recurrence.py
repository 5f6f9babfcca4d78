"""Expand a weekly recurrence rule into dated session occurrences."""

from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Iterable

from libs.common.logging import get_logger
from services.booking_service.models.enums import DayOfWeek

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionOccurrence:
    date: date
    start_time: time
    end_time: time


def _entries_by_day(schedules: Iterable) -> dict:
    by_day = {}
    for entry in schedules:
        day = DayOfWeek(entry.day)
        if day in by_day:
            logger.warning(
                "Recurrence has more than one entry on %s; keeping the first",
                day.value,
            )
            continue
        by_day[day] = entry
    return by_day


def expand_recurrence(
    schedules: Iterable, range_start: date, range_end: date
) -> list[SessionOccurrence]:
    """
    Walk ``range_start``..``range_end`` (both inclusive) one day at a time and
    emit an occurrence for every day matching a schedule entry.

    Entries need ``day``, ``from_time`` and ``to_time`` attributes. Output is in
    ascending date order.
    """
    by_day = _entries_by_day(schedules)
    occurrences: list[SessionOccurrence] = []
    if not by_day:
        return occurrences

    current = range_start
    while current <= range_end:
        entry = by_day.get(DayOfWeek.for_date(current))
        if entry is not None:
            occurrences.append(
                SessionOccurrence(
                    date=current, start_time=entry.from_time, end_time=entry.to_time
                )
            )
        current += timedelta(days=1)
    return occurrences
