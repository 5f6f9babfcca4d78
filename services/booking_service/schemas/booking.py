from datetime import date, datetime, time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from services.booking_service.models import BookingSessionStatus, BookingStatus

TIME_SLOT_PATTERN = r"^\d{2}:\d{2}(:\d{2})? \d{2}:\d{2}(:\d{2})?$"


class BookingCreate(BaseModel):
    profile_id: int
    package_id: int
    coach_id: Optional[int] = None
    date: date
    time: str = Field(..., pattern=TIME_SLOT_PATTERN, examples=["09:00 10:00"])

    @field_validator("coach_id")
    @classmethod
    def blank_coach_is_none(cls, value: Optional[int]) -> Optional[int]:
        return value or None


class BookingSessionResponse(BaseModel):
    id: int
    session_date: date
    from_time: time
    to_time: time
    status: BookingSessionStatus

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BaseModel):
    id: int
    profile_id: int
    package_id: int
    coach_id: Optional[int] = None
    price: float
    package_price: float
    status: BookingStatus
    entry_fees_paid: bool
    assessment_deduction_id: Optional[int] = None
    created_at: datetime
    sessions: List[BookingSessionResponse] = []

    model_config = ConfigDict(from_attributes=True)


class SessionOccurrenceResponse(BaseModel):
    date: date
    start_time: time
    end_time: time

    model_config = ConfigDict(from_attributes=True)


class BookingQuoteResponse(BaseModel):
    package_id: int
    sessions: List[SessionOccurrenceResponse]
    total_price: float
    deductions: float
    price_after_proration: float
    discounted_price: float
    entry_fees_due: bool
    entry_fees: float
    assessment_credit_applied: bool
    assessment_credit: float
    assessment_booking_id: Optional[int] = None
    final_price: float
    currency: str


class BookingDeleteResponse(BaseModel):
    deleted: int
