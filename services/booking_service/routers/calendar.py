"""Calendar endpoints for the academy dashboard."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from libs.auth.models import AcademyContext
from libs.db.session import get_async_db
from services.booking_service.routers._shared import (
    get_academy_context,
    validation_http_error,
)
from services.booking_service.schemas import (
    CalendarDayResponse,
    CalendarEventResponse,
    GroupedEventResponse,
)
from services.booking_service.pricing.errors import BookingValidationError
from services.booking_service.services.calendar_ops import (
    get_calendar_slots,
    get_grouped_calendar,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/academy/calendar", tags=["calendar"])


@router.get("/slots", response_model=List[CalendarEventResponse])
async def list_slots(
    start: Optional[date] = None,
    end: Optional[date] = None,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    """Raw booking-session and block events in the range."""
    try:
        events = await get_calendar_slots(db, ctx, start, end)
    except BookingValidationError as exc:
        raise validation_http_error(exc)
    return [CalendarEventResponse.model_validate(e) for e in events]


@router.get("/events", response_model=List[CalendarDayResponse])
async def list_grouped_events(
    start: Optional[date] = None,
    end: Optional[date] = None,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    """Events grouped per day by time window, coach and package."""
    try:
        by_day = await get_grouped_calendar(db, ctx, start, end)
    except BookingValidationError as exc:
        raise validation_http_error(exc)
    return [
        CalendarDayResponse(
            date=day,
            groups=[GroupedEventResponse.model_validate(g) for g in groups],
        )
        for day, groups in by_day.items()
    ]
