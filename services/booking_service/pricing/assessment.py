"""Credit a prior assessment booking against a new booking's entry fee."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from libs.common.logging import get_logger
from services.booking_service.models import (
    Booking,
    BookingStatus,
    Package,
    PackageType,
    Program,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)


@dataclass(frozen=True)
class AssessmentCredit:
    should_pay: bool
    amount: float = 0.0
    assessment_booking_id: Optional[int] = None


NO_CREDIT = AssessmentCredit(should_pay=False, amount=0.0)


def is_qualifying_assessment(
    booking: Booking, *, sport_id: int, branch_id: Optional[int]
) -> bool:
    package = booking.package
    program = package.program if package is not None else None
    if program is None:
        return False
    return (
        program.assessment_deducted_from_program
        and program.sport_id == sport_id
        and package.effective_type == PackageType.ASSESSMENT
        and program.branch_id == branch_id
    )


def select_assessment_booking(
    candidates: Iterable[Booking], *, sport_id: int, branch_id: Optional[int]
) -> Optional[Booking]:
    """Return the first qualifying booking; candidates come most recent first."""
    for booking in candidates:
        if is_qualifying_assessment(booking, sport_id=sport_id, branch_id=branch_id):
            return booking
    return None


def unconsumed_bookings_query(profile_id: int):
    """Successful bookings of an athlete that no other booking has credited yet."""
    consumed = select(Booking.assessment_deduction_id).where(
        Booking.assessment_deduction_id.is_not(None)
    )
    return (
        select(Booking)
        .where(
            Booking.profile_id == profile_id,
            Booking.status == BookingStatus.SUCCESS,
            Booking.id.not_in(consumed),
        )
        .options(selectinload(Booking.package).selectinload(Package.program))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )


async def check_assessment_deduction(
    db: AsyncSession,
    *,
    profile_id: int,
    sport_id: int,
    program_id: int,
    package: Package,
    start_date: date,
) -> AssessmentCredit:
    """
    Look for the athlete's latest unconsumed assessment booking in the same
    sport and branch, from a program that allows crediting it.

    The amount is ``entry_fees - assessment price`` and is negative when the
    assessment cost more than the entry fee.
    """
    program = await db.get(Program, program_id)
    branch_id = program.branch_id if program is not None else None

    result = await db.execute(unconsumed_bookings_query(profile_id))
    assessment = select_assessment_booking(
        result.scalars().all(), sport_id=sport_id, branch_id=branch_id
    )
    if assessment is None:
        return NO_CREDIT

    amount = float(package.entry_fees or 0) - float(assessment.price)
    logger.info(
        "Assessment booking %s credited for profile %s (amount=%.2f, start=%s)",
        assessment.id,
        profile_id,
        amount,
        start_date,
    )
    return AssessmentCredit(
        should_pay=True, amount=amount, assessment_booking_id=assessment.id
    )
