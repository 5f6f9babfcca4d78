from datetime import date, datetime, time
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.booking_service.models.enums import (
    BookingSessionStatus,
    BookingStatus,
    enum_values,
)
from sqlalchemy import Boolean, Date, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Float, ForeignKey, Integer, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    package_id: Mapped[int] = mapped_column(
        ForeignKey("packages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    coach_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("coaches.id", ondelete="CASCADE"), nullable=True
    )

    # Final amount charged, after proration, discounts, fees and credits
    price: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    # Nominal package price at booking time
    package_price: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        SAEnum(
            BookingStatus,
            name="booking_status_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    entry_fees_paid: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )
    # Assessment booking whose price was credited against this booking's entry fee
    assessment_deduction_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    profile = relationship("Profile")
    package = relationship("Package")
    coach = relationship("Coach")
    sessions = relationship(
        "BookingSession",
        back_populates="booking",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="BookingSession.session_date",
    )
    assessment_deduction = relationship("Booking", remote_side="Booking.id")

    def __repr__(self):
        return f"<Booking Profile={self.profile_id} Package={self.package_id}>"


class BookingSession(Base):
    """One dated session consumed by a booking."""

    __tablename__ = "booking_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[int] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    session_date: Mapped[date] = mapped_column(
        "date", Date, nullable=False, index=True
    )
    from_time: Mapped[time] = mapped_column("from", Time, nullable=False)
    to_time: Mapped[time] = mapped_column("to", Time, nullable=False)
    status: Mapped[BookingSessionStatus] = mapped_column(
        SAEnum(
            BookingSessionStatus,
            name="booking_session_status_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=BookingSessionStatus.PENDING,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    booking = relationship("Booking", back_populates="sessions")


class EntryFeesHistory(Base):
    """Marks the one-time entry fee as paid for an athlete, sport and program."""

    __tablename__ = "entry_fees_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id"), nullable=False, index=True
    )
    sport_id: Mapped[int] = mapped_column(
        ForeignKey("sports.id", ondelete="CASCADE"), nullable=False
    )
    program_id: Mapped[int] = mapped_column(ForeignKey("programs.id"), nullable=False)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
