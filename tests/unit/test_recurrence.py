"""Unit tests for weekly recurrence expansion."""

import logging
from datetime import date, time
from types import SimpleNamespace

import pytest
from services.booking_service.models import DayOfWeek
from services.booking_service.pricing.recurrence import (
    SessionOccurrence,
    expand_recurrence,
)


def _entry(day, start=(9, 0), end=(10, 0)):
    return SimpleNamespace(day=day, from_time=time(*start), to_time=time(*end))


MON_WED = [_entry(DayOfWeek.MON), _entry(DayOfWeek.WED, (17, 30), (18, 30))]


@pytest.mark.unit
def test_expands_matching_weekdays_in_order():
    sessions = expand_recurrence(MON_WED, date(2025, 3, 3), date(2025, 3, 16))

    assert [s.date for s in sessions] == [
        date(2025, 3, 3),
        date(2025, 3, 5),
        date(2025, 3, 10),
        date(2025, 3, 12),
    ]
    assert sessions[1] == SessionOccurrence(
        date=date(2025, 3, 5), start_time=time(17, 30), end_time=time(18, 30)
    )


@pytest.mark.unit
def test_range_endpoints_are_inclusive():
    sessions = expand_recurrence(MON_WED, date(2025, 3, 3), date(2025, 3, 5))

    assert [s.date for s in sessions] == [date(2025, 3, 3), date(2025, 3, 5)]


@pytest.mark.unit
def test_single_day_range():
    assert len(expand_recurrence(MON_WED, date(2025, 3, 3), date(2025, 3, 3))) == 1
    assert expand_recurrence(MON_WED, date(2025, 3, 4), date(2025, 3, 4)) == []


@pytest.mark.unit
def test_empty_rule_or_reversed_range_yields_nothing():
    assert expand_recurrence([], date(2025, 3, 1), date(2025, 3, 31)) == []
    assert expand_recurrence(MON_WED, date(2025, 3, 31), date(2025, 3, 1)) == []


@pytest.mark.unit
def test_accepts_plain_string_days():
    sessions = expand_recurrence(
        [_entry("sun")], date(2025, 3, 1), date(2025, 3, 31)
    )

    assert [s.date.day for s in sessions] == [2, 9, 16, 23, 30]


@pytest.mark.unit
def test_duplicate_weekday_keeps_first_entry(caplog):
    rule = [_entry(DayOfWeek.MON, (9, 0), (10, 0)), _entry(DayOfWeek.MON, (11, 0), (12, 0))]

    with caplog.at_level(logging.WARNING):
        sessions = expand_recurrence(rule, date(2025, 3, 3), date(2025, 3, 10))

    assert len(sessions) == 2
    assert all(s.start_time == time(9, 0) for s in sessions)
    assert "more than one entry" in caplog.text


@pytest.mark.unit
def test_expansion_is_repeatable():
    first = expand_recurrence(MON_WED, date(2025, 1, 1), date(2025, 6, 30))
    second = expand_recurrence(MON_WED, date(2025, 1, 1), date(2025, 6, 30))

    assert first == second
    assert first == sorted(first, key=lambda s: s.date)
