"""Booking endpoints: quote, create and delete."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from libs.auth.models import AcademyContext
from libs.db.session import get_async_db
from services.booking_service.routers._shared import get_academy_context
from services.booking_service.schemas import (
    BookingCreate,
    BookingDeleteResponse,
    BookingQuoteResponse,
    BookingResponse,
    SessionOccurrenceResponse,
)
from services.booking_service.services.booking_ops import (
    BookingQuote,
    create_booking,
    delete_bookings,
    quote_booking,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/academy/bookings", tags=["bookings"])


def _quote_response(quote: BookingQuote) -> BookingQuoteResponse:
    return BookingQuoteResponse(
        package_id=quote.package.id,
        sessions=[
            SessionOccurrenceResponse.model_validate(s) for s in quote.sessions
        ],
        total_price=quote.breakdown.total_price,
        deductions=quote.breakdown.deductions,
        price_after_proration=quote.price_after_proration,
        discounted_price=quote.discounted_price,
        entry_fees_due=quote.entry_fee.should_pay,
        entry_fees=quote.entry_fee_amount,
        assessment_credit_applied=quote.assessment_credit.should_pay,
        assessment_credit=quote.assessment_amount,
        assessment_booking_id=quote.assessment_credit.assessment_booking_id,
        final_price=quote.final_price,
        currency=quote.currency,
    )


@router.post("/quote", response_model=BookingQuoteResponse)
async def quote(
    booking_in: BookingCreate,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    """Price a booking without creating it."""
    outcome = await quote_booking(db, ctx, booking_in)
    if not outcome.ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=outcome.error.as_detail()
        )
    return _quote_response(outcome.quote)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create(
    booking_in: BookingCreate,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    outcome = await create_booking(db, ctx, booking_in)
    if not outcome.ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=outcome.error.as_detail()
        )
    return outcome.booking


@router.delete("", response_model=BookingDeleteResponse)
async def delete(
    ids: List[int] = Query(..., min_length=1),
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    deleted = await delete_bookings(db, ctx, ids)
    return BookingDeleteResponse(deleted=deleted)
