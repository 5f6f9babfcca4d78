"""Unit tests for calendar event grouping."""

from datetime import date

import pytest
from services.booking_service.calendar_grouping import (
    BLOCK_COLOR,
    BLOCKED_TIME,
    DEFAULT_PALETTE,
    NO_COACH,
    CalendarEvent,
    group_events,
    group_events_by_day,
    validate_calendar_range,
)
from services.booking_service.pricing.errors import BookingValidationError

DAY = date(2025, 3, 10)


def _booking(id, coach="Coach A", package_id=1, start="09:00:00", end="10:00:00", **kw):
    return CalendarEvent(
        id=id,
        date=kw.pop("date", DAY),
        start_time=start,
        end_time=end,
        coach_name=coach,
        package_id=package_id,
        package_name=f"Package {package_id}",
        program_name="Junior Squad",
        **kw,
    )


def _block(id, start="12:00:00", end="13:00:00"):
    return CalendarEvent(id=id, date=DAY, start_time=start, end_time=end, is_block=True)


@pytest.mark.unit
def test_same_slot_coach_and_package_collapse():
    groups = group_events([_booking(1), _booking(2), _booking(3)])

    assert len(groups) == 1
    assert groups[0].count == 3
    assert [e.id for e in groups[0].events] == [1, 2, 3]
    assert groups[0].time == "09:00:00-10:00:00"


@pytest.mark.unit
def test_different_coach_or_package_or_time_split():
    groups = group_events(
        [
            _booking(1),
            _booking(2, coach="Coach B"),
            _booking(3, package_id=2),
            _booking(4, start="10:00:00", end="11:00:00"),
        ]
    )

    assert [g.count for g in groups] == [1, 1, 1, 1]


@pytest.mark.unit
def test_blocks_never_merge():
    groups = group_events([_block(1), _block(2)])

    assert len(groups) == 2
    assert groups[0].key == "block-12:00:00-13:00:00-1"
    assert all(g.color == BLOCK_COLOR for g in groups)
    assert all(g.package_name == BLOCKED_TIME for g in groups)


@pytest.mark.unit
def test_events_without_identity_are_dropped():
    groups = group_events(
        [
            _booking(1, start=None),
            _booking(2, package_id=None),
            _block(3, end=None),
            _booking(4),
        ]
    )

    assert len(groups) == 1
    assert groups[0].events[0].id == 4


@pytest.mark.unit
def test_colors_use_program_color_or_cycle_palette():
    groups = group_events(
        [
            _booking(1, package_id=1, color="#123456"),
            _booking(2, package_id=2),
            _booking(3, package_id=3),
        ]
    )

    assert groups[0].color == "#123456"
    assert groups[1].color == DEFAULT_PALETTE[1]
    assert groups[2].color == DEFAULT_PALETTE[2]


@pytest.mark.unit
def test_missing_coach_label_and_short_times_padded():
    groups = group_events([_booking(1, coach=None, start="09:00", end="10:00")])

    assert groups[0].coach_name == NO_COACH
    assert groups[0].time == "09:00:00-10:00:00"


@pytest.mark.unit
def test_group_by_day_orders_days():
    later = date(2025, 3, 12)
    by_day = group_events_by_day([_booking(1, date=later), _booking(2), _block(3)])

    assert list(by_day) == [DAY, later]
    assert len(by_day[DAY]) == 2


@pytest.mark.unit
@pytest.mark.parametrize(
    "start,end,message",
    [
        (None, DAY, "Start and end dates are required"),
        (DAY, DAY, "Start and end dates cannot be the same"),
        (date(2025, 3, 11), DAY, "Start date cannot be greater than end date"),
    ],
)
def test_calendar_range_validation(start, end, message):
    with pytest.raises(BookingValidationError) as exc_info:
        validate_calendar_range(start, end)

    assert exc_info.value.message == message
