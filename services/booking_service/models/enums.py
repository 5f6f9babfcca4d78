"""Enum definitions for booking service models."""

import enum
from datetime import date
from typing import Optional


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class PackageType(str, enum.Enum):
    ASSESSMENT = "assessment"
    MONTHLY = "monthly"
    TERM = "term"
    FULL_SEASON = "full_season"


# Packages created before package_type existed only carry the type in their name.
_NAME_PREFIXES = (
    ("assessment", PackageType.ASSESSMENT),
    ("monthly", PackageType.MONTHLY),
    ("term", PackageType.TERM),
)


def infer_package_type(name: Optional[str]) -> PackageType:
    """Derive a package type from a legacy package name prefix."""
    lowered = (name or "").strip().lower()
    for prefix, package_type in _NAME_PREFIXES:
        if lowered.startswith(prefix):
            return package_type
    return PackageType.FULL_SEASON


class DayOfWeek(str, enum.Enum):
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @classmethod
    def for_date(cls, day: date) -> "DayOfWeek":
        return list(cls)[day.weekday()]


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    SUCCESS = "success"
    REJECTED = "rejected"


class BookingSessionStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    UPCOMING = "upcoming"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class DiscountType(str, enum.Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class BlockScope(str, enum.Enum):
    ALL = "all"
    SPECIFIC = "specific"
