"""Booking orchestration: price a booking and persist it atomically.

The pricing pipeline only reads. ``create_booking`` runs it inside the same
transaction that writes the booking, its session rows and, when a fee was
charged, the entry-fee history row, so a failure leaves nothing behind.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from libs.auth.models import AcademyContext
from libs.common.config import get_settings
from libs.common.logging import get_logger
from services.booking_service.models import (
    Booking,
    BookingSession,
    BookingSessionStatus,
    BookingStatus,
    Coach,
    EntryFeesHistory,
    Package,
    Profile,
    Program,
)
from services.booking_service.pricing.assessment import (
    NO_CREDIT,
    AssessmentCredit,
    check_assessment_deduction,
)
from services.booking_service.pricing.discounts import (
    get_price_after_active_discounts,
)
from services.booking_service.pricing.entry_fees import (
    NO_FEE,
    EntryFeeDecision,
    check_entry_fees,
)
from services.booking_service.pricing.errors import BookingValidationError
from services.booking_service.pricing.recurrence import SessionOccurrence
from services.booking_service.pricing.sessions import (
    PriceBreakdown,
    calculate_sessions_and_price,
)
from services.booking_service.schemas import BookingCreate
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

CREATE_FAILED_MESSAGE = "Failed to create booking"
ASSESSMENT_CONSUMED_MESSAGE = "The assessment credit has already been used"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class BookingError:
    message: str
    field: Optional[str] = None

    def as_detail(self) -> dict:
        return {"message": self.message, "field": self.field}


@dataclass
class BookingQuote:
    package: Package
    breakdown: PriceBreakdown
    discounted_price: float
    entry_fee: EntryFeeDecision = NO_FEE
    assessment_credit: AssessmentCredit = NO_CREDIT
    currency: str = "AED"

    @property
    def sessions(self) -> list[SessionOccurrence]:
        return self.breakdown.sessions

    @property
    def price_after_proration(self) -> float:
        return self.breakdown.final_price

    @property
    def entry_fee_amount(self) -> float:
        return self.entry_fee.amount if self.entry_fee.should_pay else 0.0

    @property
    def assessment_amount(self) -> float:
        if not self.assessment_credit.should_pay:
            return 0.0
        return self.assessment_credit.amount

    @property
    def final_price(self) -> float:
        # The credit amount is signed; a large credit cannot push the price negative.
        total = self.discounted_price + self.entry_fee_amount + self.assessment_amount
        return max(total, 0.0)


@dataclass
class BookingOutcome:
    booking: Optional[Booking] = None
    quote: Optional[BookingQuote] = None
    error: Optional[BookingError] = None
    sessions: list[BookingSession] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


async def _load_package(
    db: AsyncSession, ctx: AcademyContext, package_id: int
) -> Package:
    result = await db.execute(
        select(Package)
        .join(Program, Package.program_id == Program.id)
        .where(Package.id == package_id, Program.academy_id == ctx.academy_id)
        .options(
            selectinload(Package.program).selectinload(Program.sport),
            selectinload(Package.program).selectinload(Program.branch),
            selectinload(Package.schedules),
        )
    )
    package = result.scalar_one_or_none()
    if package is None:
        raise BookingValidationError("Package not found", "package_id")
    if package.program is None or package.program.sport_id is None:
        raise BookingValidationError("Invalid package configuration", "package_id")
    return package


async def _check_participants(
    db: AsyncSession, ctx: AcademyContext, booking_in: BookingCreate
) -> None:
    profile = await db.get(Profile, booking_in.profile_id)
    if profile is None:
        raise BookingValidationError("Profile not found", "profile_id")

    if booking_in.coach_id is not None:
        coach = await db.get(Coach, booking_in.coach_id)
        if coach is None or coach.academy_id != ctx.academy_id:
            raise BookingValidationError("Coach not found", "coach_id")


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------


async def _price_booking(
    db: AsyncSession, ctx: AcademyContext, booking_in: BookingCreate
) -> BookingQuote:
    await _check_participants(db, ctx, booking_in)
    package = await _load_package(db, ctx, booking_in.package_id)
    program = package.program

    breakdown = calculate_sessions_and_price(
        package, booking_in.date, package.schedules, booking_in.time
    )
    discounted = await get_price_after_active_discounts(
        db,
        package_id=package.id,
        price=breakdown.final_price,
    )

    # Independent reads on one session: awaited in turn, not gathered.
    entry_fee = await check_entry_fees(
        db,
        profile_id=booking_in.profile_id,
        sport_id=program.sport_id,
        program_id=program.id,
        package=package,
        start_date=booking_in.date,
    )
    credit = await check_assessment_deduction(
        db,
        profile_id=booking_in.profile_id,
        sport_id=program.sport_id,
        program_id=program.id,
        package=package,
        start_date=booking_in.date,
    )

    quote = BookingQuote(
        package=package,
        breakdown=breakdown,
        discounted_price=discounted,
        entry_fee=entry_fee,
        assessment_credit=credit,
        currency=get_settings().DEFAULT_CURRENCY,
    )
    logger.info(
        "Quoted package %s for profile %s: sessions=%d total=%.2f deductions=%.2f "
        "discounted=%.2f entry_fee=%.2f credit=%.2f final=%.2f",
        package.id,
        booking_in.profile_id,
        len(breakdown.sessions),
        breakdown.total_price,
        breakdown.deductions,
        discounted,
        quote.entry_fee_amount,
        quote.assessment_amount,
        quote.final_price,
    )
    return quote


async def quote_booking(
    db: AsyncSession, ctx: AcademyContext, booking_in: BookingCreate
) -> BookingOutcome:
    """Run the full pricing pipeline without writing anything."""
    try:
        quote = await _price_booking(db, ctx, booking_in)
    except BookingValidationError as exc:
        return BookingOutcome(error=BookingError(exc.message, exc.field))
    return BookingOutcome(quote=quote)


# ---------------------------------------------------------------------------
# Create (atomic)
# ---------------------------------------------------------------------------


async def _claim_assessment(db: AsyncSession, assessment_booking_id: int) -> None:
    """Lock the credited assessment booking and make sure nobody consumed it."""
    await db.execute(
        select(Booking.id).where(Booking.id == assessment_booking_id).with_for_update()
    )
    result = await db.execute(
        select(Booking.id)
        .where(Booking.assessment_deduction_id == assessment_booking_id)
        .limit(1)
    )
    if result.scalar_one_or_none() is not None:
        raise BookingValidationError(ASSESSMENT_CONSUMED_MESSAGE, "package_id")


def _session_rows(sessions: Iterable[SessionOccurrence]) -> list[BookingSession]:
    return [
        BookingSession(
            session_date=occurrence.date,
            from_time=occurrence.start_time,
            to_time=occurrence.end_time,
            status=BookingSessionStatus.PENDING,
        )
        for occurrence in sessions
    ]


async def create_booking(
    db: AsyncSession, ctx: AcademyContext, booking_in: BookingCreate
) -> BookingOutcome:
    """Price and persist a booking following the orchestration steps.

    1. Validate the athlete, coach and package
    2. Sessions and pro-rated price for the package type
    3. Entry fee, then assessment credit
    4. Linked discounts on the pro-rated price
    5. Lock and re-check the credited assessment booking
    6. Write booking, sessions and entry-fee history, then commit
    """
    try:
        quote = await _price_booking(db, ctx, booking_in)
        package = quote.package
        credit = quote.assessment_credit

        if credit.should_pay and credit.assessment_booking_id is not None:
            await _claim_assessment(db, credit.assessment_booking_id)

        booking = Booking(
            profile_id=booking_in.profile_id,
            package_id=package.id,
            coach_id=booking_in.coach_id,
            price=quote.final_price,
            package_price=float(package.price),
            status=BookingStatus.SUCCESS,
            entry_fees_paid=quote.entry_fee.should_pay,
            assessment_deduction_id=credit.assessment_booking_id,
        )
        booking.sessions = _session_rows(quote.sessions)
        db.add(booking)

        if quote.entry_fee.should_pay:
            db.add(
                EntryFeesHistory(
                    profile_id=booking_in.profile_id,
                    sport_id=package.program.sport_id,
                    program_id=package.program_id,
                )
            )

        await db.flush()
        booking_id = booking.id
        await db.commit()
    except BookingValidationError as exc:
        await db.rollback()
        return BookingOutcome(error=BookingError(exc.message, exc.field))
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(
            "Booking write failed for profile %s package %s",
            booking_in.profile_id,
            booking_in.package_id,
        )
        return BookingOutcome(error=BookingError(CREATE_FAILED_MESSAGE))

    booking = await get_booking(db, booking_id)
    logger.info(
        "Created booking %s for profile %s (price=%.2f, sessions=%d)",
        booking.id,
        booking.profile_id,
        booking.price,
        len(booking.sessions),
    )
    return BookingOutcome(booking=booking, sessions=booking.sessions)


async def get_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
    result = await db.execute(
        select(Booking)
        .where(Booking.id == booking_id)
        .options(selectinload(Booking.sessions))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


async def delete_bookings(
    db: AsyncSession, ctx: AcademyContext, ids: Iterable[int]
) -> int:
    """Delete the given bookings of the academy with their sessions.

    Ids belonging to other academies are ignored. Returns the number deleted.
    """
    result = await db.execute(
        select(Booking.id)
        .join(Package, Booking.package_id == Package.id)
        .join(Program, Package.program_id == Program.id)
        .where(Booking.id.in_(list(ids)), Program.academy_id == ctx.academy_id)
    )
    owned = list(result.scalars().all())
    if not owned:
        return 0

    # Bookings credited from a deleted assessment keep their price.
    await db.execute(
        update(Booking)
        .where(Booking.assessment_deduction_id.in_(owned))
        .values(assessment_deduction_id=None)
    )
    await db.execute(delete(BookingSession).where(BookingSession.booking_id.in_(owned)))
    await db.execute(delete(Booking).where(Booking.id.in_(owned)))
    await db.commit()

    logger.info("Deleted bookings %s for academy %s", owned, ctx.academy_id)
    return len(owned)

