from datetime import date, datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy import Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# ============================================================================
# ACADEMY STRUCTURE
# ============================================================================


class Academy(Base):
    __tablename__ = "academies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Identity of the staff account that owns the academy (token ``sub``)
    user_id: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    programs = relationship("Program", back_populates="academy")
    branches = relationship("Branch", back_populates="academy")

    def __repr__(self):
        return f"<Academy {self.name}>"


class Branch(Base):
    __tablename__ = "branches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    academy_id: Mapped[int] = mapped_column(
        ForeignKey("academies.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)

    academy = relationship("Academy", back_populates="branches")

    def __repr__(self):
        return f"<Branch {self.name}>"


class Sport(Base):
    __tablename__ = "sports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)

    def __repr__(self):
        return f"<Sport {self.name}>"


coach_programs = Table(
    "coach_programs",
    Base.metadata,
    Column(
        "coach_id", ForeignKey("coaches.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "program_id", ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True
    ),
)


class Program(Base):
    __tablename__ = "programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    academy_id: Mapped[int] = mapped_column(
        ForeignKey("academies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    branch_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("branches.id", ondelete="CASCADE"), nullable=True
    )
    sport_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("sports.id", ondelete="CASCADE"), nullable=True
    )
    name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    assessment_deducted_from_program: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    academy = relationship("Academy", back_populates="programs")
    branch = relationship("Branch")
    sport = relationship("Sport")
    packages = relationship(
        "Package", back_populates="program", cascade="all, delete-orphan"
    )
    coaches = relationship("Coach", secondary=coach_programs, back_populates="programs")

    def __repr__(self):
        return f"<Program {self.name}>"


# ============================================================================
# PEOPLE
# ============================================================================


class Coach(Base):
    __tablename__ = "coaches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    academy_id: Mapped[int] = mapped_column(
        ForeignKey("academies.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    programs = relationship(
        "Program", secondary=coach_programs, back_populates="coaches"
    )

    def __repr__(self):
        return f"<Coach {self.name}>"


class Profile(Base):
    """An athlete profile that bookings are made for."""

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    gender: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    birthday: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    def __repr__(self):
        return f"<Profile {self.name}>"
