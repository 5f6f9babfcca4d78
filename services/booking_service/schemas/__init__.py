"""Booking Service schemas package.

Re-exports all schemas so routers and service modules can import from
``services.booking_service.schemas`` directly.

Every schema class must be listed here.
"""

from services.booking_service.schemas.booking import (  # noqa: F401
    BookingCreate,
    BookingDeleteResponse,
    BookingQuoteResponse,
    BookingResponse,
    BookingSessionResponse,
    SessionOccurrenceResponse,
)
from services.booking_service.schemas.calendar import (  # noqa: F401
    CalendarDayResponse,
    CalendarEventResponse,
    GroupedEventResponse,
)
from services.booking_service.schemas.package import (  # noqa: F401
    BlockCreate,
    BlockResponse,
    DiscountCreate,
    DiscountResponse,
    DiscountUpdate,
    PackageCreate,
    PackageResponse,
    PackageUpdate,
    ScheduleIn,
    ScheduleResponse,
)

__all__ = [
    "BlockCreate",
    "BlockResponse",
    "BookingCreate",
    "BookingDeleteResponse",
    "BookingQuoteResponse",
    "BookingResponse",
    "BookingSessionResponse",
    "CalendarDayResponse",
    "CalendarEventResponse",
    "DiscountCreate",
    "DiscountResponse",
    "DiscountUpdate",
    "GroupedEventResponse",
    "PackageCreate",
    "PackageResponse",
    "PackageUpdate",
    "ScheduleIn",
    "ScheduleResponse",
    "SessionOccurrenceResponse",
]
