"""Booking service routers."""

from services.booking_service.routers.blocks import router as blocks_router
from services.booking_service.routers.bookings import router as bookings_router
from services.booking_service.routers.calendar import router as calendar_router
from services.booking_service.routers.discounts import router as discounts_router
from services.booking_service.routers.packages import router as packages_router

__all__ = [
    "blocks_router",
    "bookings_router",
    "calendar_router",
    "discounts_router",
    "packages_router",
]
