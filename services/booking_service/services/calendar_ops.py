"""Calendar read path: raw booking-session and block events for a date range."""

from datetime import date
from typing import Optional

from libs.auth.models import AcademyContext
from libs.common.datetime_utils import format_clock
from libs.common.logging import get_logger
from services.booking_service.calendar_grouping import (
    CalendarEvent,
    GroupedEvent,
    group_events_by_day,
    validate_calendar_range,
)
from services.booking_service.models import (
    Block,
    Booking,
    BookingSession,
    Branch,
    Coach,
    Package,
    Profile,
    Program,
    Sport,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


async def _session_events(
    db: AsyncSession, ctx: AcademyContext, start: date, end: date
) -> list[CalendarEvent]:
    result = await db.execute(
        select(
            BookingSession,
            Booking.package_id,
            Booking.coach_id,
            Package.name.label("package_name"),
            Program.name.label("program_name"),
            Program.color,
            Profile.name.label("student_name"),
            Profile.birthday,
            Profile.gender,
            Branch.name.label("branch_name"),
            Sport.name.label("sport_name"),
            Coach.name.label("coach_name"),
        )
        .join(Booking, BookingSession.booking_id == Booking.id)
        .join(Package, Booking.package_id == Package.id)
        .join(Program, Package.program_id == Program.id)
        .join(Profile, Booking.profile_id == Profile.id)
        .outerjoin(Branch, Program.branch_id == Branch.id)
        .outerjoin(Sport, Program.sport_id == Sport.id)
        .outerjoin(Coach, Booking.coach_id == Coach.id)
        .where(
            Program.academy_id == ctx.academy_id,
            BookingSession.session_date >= start,
            BookingSession.session_date <= end,
        )
        .order_by(
            BookingSession.session_date, BookingSession.from_time, BookingSession.id
        )
    )
    events = []
    for row in result.all():
        session = row.BookingSession
        events.append(
            CalendarEvent(
                id=session.id,
                date=session.session_date,
                start_time=format_clock(session.from_time),
                end_time=format_clock(session.to_time),
                status=session.status.value,
                program_name=row.program_name,
                student_name=row.student_name,
                student_birthday=row.birthday,
                branch_name=row.branch_name,
                sport_name=row.sport_name,
                package_name=row.package_name,
                coach_name=row.coach_name,
                package_id=row.package_id,
                coach_id=row.coach_id,
                color=row.color,
                gender=row.gender,
            )
        )
    return events


async def _block_events(
    db: AsyncSession, ctx: AcademyContext, start: date, end: date
) -> list[CalendarEvent]:
    result = await db.execute(
        select(Block)
        .where(
            Block.academy_id == ctx.academy_id,
            Block.block_date >= start,
            Block.block_date <= end,
        )
        .order_by(Block.block_date, Block.start_time, Block.id)
    )
    return [
        CalendarEvent(
            id=block.id,
            date=block.block_date,
            start_time=format_clock(block.start_time),
            end_time=format_clock(block.end_time),
            is_block=True,
            program_name=block.note,
        )
        for block in result.scalars().all()
    ]


async def get_calendar_slots(
    db: AsyncSession,
    ctx: AcademyContext,
    start: Optional[date],
    end: Optional[date],
) -> list[CalendarEvent]:
    """Raw events of the academy between ``start`` and ``end`` inclusive.

    The range is validated before anything is queried.
    """
    validate_calendar_range(start, end)
    events = await _session_events(db, ctx, start, end)
    events.extend(await _block_events(db, ctx, start, end))
    logger.debug(
        "Calendar %s..%s for academy %s: %d events",
        start,
        end,
        ctx.academy_id,
        len(events),
    )
    return events


async def get_grouped_calendar(
    db: AsyncSession,
    ctx: AcademyContext,
    start: Optional[date],
    end: Optional[date],
) -> "dict[date, list[GroupedEvent]]":
    events = await get_calendar_slots(db, ctx, start, end)
    return group_events_by_day(events)
