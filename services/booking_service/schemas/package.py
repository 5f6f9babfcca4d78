import re
from datetime import date, datetime, time
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from services.booking_service.models import (
    BlockScope,
    DayOfWeek,
    DiscountType,
    PackageType,
)

MONTH_LABEL_PATTERN = r"^[A-Z][a-z]+ \d{4}$"


# --- Recurrence ---


class ScheduleIn(BaseModel):
    day: DayOfWeek
    from_time: time
    to_time: time
    memo: Optional[str] = None
    gender: Optional[str] = None
    start_birth_year: Optional[int] = None
    end_birth_year: Optional[int] = None

    @model_validator(mode="after")
    def check_times(self) -> "ScheduleIn":
        if self.from_time >= self.to_time:
            raise ValueError("Schedule end time must be after start time")
        if (
            self.start_birth_year is not None
            and self.end_birth_year is not None
            and self.start_birth_year > self.end_birth_year
        ):
            raise ValueError("Birth year range is reversed")
        return self


class ScheduleResponse(ScheduleIn):
    id: int

    model_config = ConfigDict(from_attributes=True)


# --- Packages ---


class PackageBase(BaseModel):
    name: str
    package_type: PackageType
    price: float = Field(..., ge=0)
    capacity: int = 0
    session_per_week: int = 0
    session_duration: Optional[int] = None
    memo: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    months: Optional[List[str]] = None
    entry_fees: float = Field(0, ge=0)
    entry_fees_explanation: Optional[str] = None
    entry_fees_applied_months: Optional[List[str]] = None
    entry_fees_start_date: Optional[date] = None
    entry_fees_end_date: Optional[date] = None


class PackageCreate(PackageBase):
    program_id: int
    schedules: List[ScheduleIn] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_package(self) -> "PackageCreate":
        validate_package_fields(self)
        return self


class PackageUpdate(PackageBase):
    """Full replacement of a package, including its recurrence."""

    schedules: List[ScheduleIn] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_package(self) -> "PackageUpdate":
        validate_package_fields(self)
        return self


class PackageResponse(PackageBase):
    id: int
    program_id: int
    package_type: Optional[PackageType] = None
    schedules: List[ScheduleResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


def validate_package_fields(package: Union[PackageCreate, PackageUpdate]) -> None:
    days = [s.day for s in package.schedules]
    if len(days) != len(set(days)):
        raise ValueError("Each weekday may appear only once in a schedule")

    if package.package_type == PackageType.MONTHLY:
        if not package.months:
            raise ValueError("Monthly packages need at least one month")
        for label in package.months:
            if not re.match(MONTH_LABEL_PATTERN, label):
                raise ValueError(f"Invalid month label: {label!r}")
    elif package.package_type != PackageType.ASSESSMENT:
        if package.start_date is None or package.end_date is None:
            raise ValueError("Start and end dates are required")
        if package.start_date > package.end_date:
            raise ValueError("Start date cannot be after end date")

    if (
        package.entry_fees_start_date
        and package.entry_fees_end_date
        and package.entry_fees_start_date > package.entry_fees_end_date
    ):
        raise ValueError("Entry fees start date cannot be after end date")


# --- Discounts ---


class DiscountBase(BaseModel):
    discount_type: DiscountType
    value: float = Field(..., gt=0)
    start_date: date
    end_date: date
    package_ids: List[int] = []

    @model_validator(mode="after")
    def check_discount(self) -> "DiscountBase":
        if self.discount_type == DiscountType.PERCENTAGE and self.value > 100:
            raise ValueError("Percentage discount cannot exceed 100%")
        if self.start_date >= self.end_date:
            raise ValueError("Start date must be before end date")
        return self


class DiscountCreate(DiscountBase):
    program_id: int


class DiscountUpdate(DiscountBase):
    pass


class DiscountResponse(BaseModel):
    id: int
    program_id: int
    discount_type: DiscountType
    value: float
    start_date: date
    end_date: date
    package_ids: List[int] = []
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# --- Blocks ---

ScopeSelection = Union[Literal["all"], List[int]]


class BlockCreate(BaseModel):
    date: date
    start_time: time
    end_time: time
    branches: ScopeSelection = "all"
    sports: ScopeSelection = "all"
    packages: ScopeSelection = "all"
    programs: ScopeSelection = "all"
    note: Optional[str] = Field(None, max_length=255)

    @model_validator(mode="after")
    def check_times(self) -> "BlockCreate":
        if self.start_time >= self.end_time:
            raise ValueError("End time must be after start time")
        return self


class BlockResponse(BaseModel):
    id: int
    block_date: date
    start_time: time
    end_time: time
    branch_scope: BlockScope
    sport_scope: BlockScope
    package_scope: BlockScope
    program_scope: BlockScope
    note: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
