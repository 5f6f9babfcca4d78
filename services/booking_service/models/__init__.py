"""Booking service models package.

Re-exports every model and enum so callers can import from
``services.booking_service.models`` directly.
"""

from services.booking_service.models.block import (
    Block,
    block_branches,
    block_packages,
    block_programs,
    block_sports,
)
from services.booking_service.models.booking import (
    Booking,
    BookingSession,
    EntryFeesHistory,
)
from services.booking_service.models.core import (
    Academy,
    Branch,
    Coach,
    Profile,
    Program,
    Sport,
    coach_programs,
)
from services.booking_service.models.enums import (
    BlockScope,
    BookingSessionStatus,
    BookingStatus,
    DayOfWeek,
    DiscountType,
    PackageType,
    enum_values,
    infer_package_type,
)
from services.booking_service.models.package import (
    Discount,
    Package,
    Schedule,
    package_discount,
)

__all__ = [
    "Academy",
    "Block",
    "BlockScope",
    "Booking",
    "BookingSession",
    "BookingSessionStatus",
    "BookingStatus",
    "Branch",
    "Coach",
    "DayOfWeek",
    "Discount",
    "DiscountType",
    "EntryFeesHistory",
    "Package",
    "PackageType",
    "Profile",
    "Program",
    "Schedule",
    "Sport",
    "block_branches",
    "block_packages",
    "block_programs",
    "block_sports",
    "coach_programs",
    "enum_values",
    "infer_package_type",
    "package_discount",
]
