from datetime import date, datetime, time
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.booking_service.models.enums import BlockScope, enum_values
from sqlalchemy import Column, Date, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, String, Table, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship


def _block_link(name: str, target: str) -> Table:
    return Table(
        f"block_{name}",
        Base.metadata,
        Column(
            "block_id", ForeignKey("blocks.id", ondelete="CASCADE"), primary_key=True
        ),
        Column(
            f"{target}_id",
            ForeignKey(f"{name}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


block_branches = _block_link("branches", "branch")
block_sports = _block_link("sports", "sport")
block_packages = _block_link("packages", "package")
block_programs = _block_link("programs", "program")


def _scope_column() -> Mapped[BlockScope]:
    return mapped_column(
        SAEnum(
            BlockScope,
            name="block_scope_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=BlockScope.ALL,
        nullable=False,
    )


class Block(Base):
    """A blackout period that occupies calendar time without a booking."""

    __tablename__ = "blocks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    academy_id: Mapped[int] = mapped_column(
        ForeignKey("academies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    block_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    branch_scope: Mapped[BlockScope] = _scope_column()
    sport_scope: Mapped[BlockScope] = _scope_column()
    package_scope: Mapped[BlockScope] = _scope_column()
    program_scope: Mapped[BlockScope] = _scope_column()
    note: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    branches = relationship("Branch", secondary=block_branches)
    sports = relationship("Sport", secondary=block_sports)
    packages = relationship("Package", secondary=block_packages)
    programs = relationship("Program", secondary=block_programs)

    def __repr__(self):
        return f"<Block {self.block_date} {self.start_time}-{self.end_time}>"
