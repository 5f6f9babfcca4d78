"""Session list and pro-rated base price for each package type."""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Callable, Iterable

from libs.common.datetime_utils import month_bounds, month_label, parse_clock
from services.booking_service.models import Package, PackageType
from services.booking_service.pricing.errors import BookingValidationError
from services.booking_service.pricing.recurrence import (
    SessionOccurrence,
    expand_recurrence,
)

NO_SESSIONS_MESSAGE = "No sessions scheduled for this package in the selected period"
NOTHING_LEFT_MESSAGE = "No sessions remain after the selected date"


@dataclass
class PriceBreakdown:
    sessions: list[SessionOccurrence] = field(default_factory=list)
    total_price: float = 0.0
    deductions: float = 0.0

    @property
    def final_price(self) -> float:
        return self.total_price - self.deductions


def parse_time_slot(value: str) -> tuple[time, time]:
    """Parse a ``"HH:mm HH:mm"`` slot into its start and end times."""
    parts = value.split()
    if len(parts) != 2:
        raise BookingValidationError(
            "Time must be two clock times separated by a space", "time"
        )
    try:
        start, end = parse_clock(parts[0]), parse_clock(parts[1])
    except ValueError as exc:
        raise BookingValidationError(str(exc), "time") from exc
    if start >= end:
        raise BookingValidationError("End time must be after start time", "time")
    return start, end


def _prorate(
    all_sessions: list[SessionOccurrence], total_price: float, selected_date: date
) -> PriceBreakdown:
    if not all_sessions:
        raise BookingValidationError(NO_SESSIONS_MESSAGE, "date")

    price_per_session = total_price / len(all_sessions)
    elapsed = [s for s in all_sessions if s.date < selected_date]
    remaining = [s for s in all_sessions if s.date >= selected_date]
    if not remaining:
        raise BookingValidationError(NOTHING_LEFT_MESSAGE, "date")

    return PriceBreakdown(
        sessions=remaining,
        total_price=total_price,
        deductions=len(elapsed) * price_per_session,
    )


def _assessment(package, selected_date, schedules, booking_time) -> PriceBreakdown:
    start, end = parse_time_slot(booking_time)
    return PriceBreakdown(
        sessions=[SessionOccurrence(date=selected_date, start_time=start, end_time=end)],
        total_price=float(package.price),
    )


def _monthly(package, selected_date, schedules, booking_time) -> PriceBreakdown:
    if month_label(selected_date) not in (package.months or []):
        raise BookingValidationError(
            "Selected month is not available in this package", "date"
        )
    month_start, month_end = month_bounds(selected_date)
    all_sessions = expand_recurrence(schedules, month_start, month_end)
    return _prorate(all_sessions, float(package.price), selected_date)


def _seasonal(package, selected_date, schedules, booking_time) -> PriceBreakdown:
    if package.start_date is None or package.end_date is None:
        raise BookingValidationError("Package has no validity period", "package_id")
    all_sessions = expand_recurrence(schedules, package.start_date, package.end_date)
    return _prorate(all_sessions, float(package.price), selected_date)


_STRATEGIES: dict[PackageType, Callable[..., PriceBreakdown]] = {
    PackageType.ASSESSMENT: _assessment,
    PackageType.MONTHLY: _monthly,
    PackageType.TERM: _seasonal,
    PackageType.FULL_SEASON: _seasonal,
}


def calculate_sessions_and_price(
    package: Package,
    selected_date: date,
    schedules: Iterable,
    booking_time: str,
) -> PriceBreakdown:
    """
    Work out which sessions a booking starting on ``selected_date`` buys and
    what it costs before fees and discounts.

    - Assessment: a single session at ``booking_time`` on the selected date.
    - Monthly: the selected month must be offered; sessions of that month
      only, priced per session of the month.
    - Term / full season: sessions across the package's whole date range.

    Sessions dated before ``selected_date`` are dropped and their share of
    the price is returned as ``deductions``.
    """
    strategy = _STRATEGIES[package.effective_type]
    return strategy(package, selected_date, list(schedules), booking_time)
