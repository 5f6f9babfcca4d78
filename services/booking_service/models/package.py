from datetime import date, datetime, time
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.booking_service.models.enums import (
    DayOfWeek,
    DiscountType,
    PackageType,
    enum_values,
    infer_package_type,
)
from sqlalchemy import JSON, Column, Date, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Float, ForeignKey, Integer, String, Table, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

package_discount = Table(
    "package_discount",
    Base.metadata,
    Column(
        "package_id", ForeignKey("packages.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "discount_id", ForeignKey("discounts.id", ondelete="CASCADE"), primary_key=True
    ),
)


class Package(Base):
    """A purchasable subscription unit of a program."""

    __tablename__ = "packages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    program_id: Mapped[int] = mapped_column(
        ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(
        String, nullable=False, default="Assessment Package"
    )
    # Null on legacy rows; effective_type falls back to the name prefix.
    package_type: Mapped[Optional[PackageType]] = mapped_column(
        SAEnum(
            PackageType,
            name="package_type_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=True,
    )
    price: Mapped[float] = mapped_column(Float, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    session_per_week: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0"
    )
    session_duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    memo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Validity: continuous range, or explicit "March 2025" labels for monthly packages
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    months: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    # Entry fees
    entry_fees: Mapped[float] = mapped_column(Float, default=0, server_default="0")
    entry_fees_explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    entry_fees_applied_months: Mapped[Optional[list]] = mapped_column(
        JSON, nullable=True
    )
    entry_fees_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    entry_fees_end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    program = relationship("Program", back_populates="packages")
    schedules = relationship(
        "Schedule",
        back_populates="package",
        cascade="all, delete-orphan",
        order_by="Schedule.id",
    )
    discounts = relationship(
        "Discount",
        secondary=package_discount,
        back_populates="packages",
        order_by="Discount.id",
    )

    @property
    def effective_type(self) -> PackageType:
        return self.package_type or infer_package_type(self.name)

    def __repr__(self):
        return f"<Package {self.name}>"


class Schedule(Base):
    """One weekly entry of a package's recurrence rule."""

    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    package_id: Mapped[int] = mapped_column(
        ForeignKey("packages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[DayOfWeek] = mapped_column(
        SAEnum(
            DayOfWeek,
            name="day_of_week_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    from_time: Mapped[time] = mapped_column("from", Time, nullable=False)
    to_time: Mapped[time] = mapped_column("to", Time, nullable=False)
    memo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    start_birth_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    end_birth_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    package = relationship("Package", back_populates="schedules")

    def __repr__(self):
        return f"<Schedule {self.day.value} {self.from_time}-{self.to_time}>"


class Discount(Base):
    """A time-bounded price reduction attached to packages of one program."""

    __tablename__ = "discounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    program_id: Mapped[int] = mapped_column(
        ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    discount_type: Mapped[DiscountType] = mapped_column(
        "type",
        SAEnum(
            DiscountType,
            name="discount_type_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    value: Mapped[float] = mapped_column(Float, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    packages = relationship(
        "Package", secondary=package_discount, back_populates="discounts"
    )

    @property
    def package_ids(self) -> list[int]:
        return [p.id for p in self.packages]

    def __repr__(self):
        return f"<Discount {self.discount_type.value} {self.value}>"
