"""create_booking_tables

Revision ID: b7c1e2d3a401
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "b7c1e2d3a401"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


package_type_enum = sa.Enum(
    "assessment", "monthly", "term", "full_season", name="package_type_enum"
)
day_of_week_enum = sa.Enum(
    "mon", "tue", "wed", "thu", "fri", "sat", "sun", name="day_of_week_enum"
)
discount_type_enum = sa.Enum("fixed", "percentage", name="discount_type_enum")
booking_status_enum = sa.Enum(
    "pending", "success", "rejected", name="booking_status_enum"
)
booking_session_status_enum = sa.Enum(
    "pending",
    "accepted",
    "upcoming",
    "rejected",
    "cancelled",
    name="booking_session_status_enum",
)
block_scope_enum = sa.Enum("all", "specific", name="block_scope_enum")


def _timestamps(*, updated: bool = True) -> list:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=True)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True))
    return columns


def upgrade() -> None:
    """Upgrade schema - Create academy, package, booking and block tables."""

    # Academy structure
    op.create_table(
        "academies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_academies_user_id", "academies", ["user_id"], unique=True)

    op.create_table(
        "branches",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("academy_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["academy_id"], ["academies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "sports",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "programs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("academy_id", sa.Integer(), nullable=False),
        sa.Column("branch_id", sa.Integer(), nullable=True),
        sa.Column("sport_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("color", sa.String(), nullable=True),
        sa.Column(
            "assessment_deducted_from_program",
            sa.Boolean(),
            server_default="false",
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["academy_id"], ["academies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["branch_id"], ["branches.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sport_id"], ["sports.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_programs_academy_id", "programs", ["academy_id"])

    # People
    op.create_table(
        "coaches",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("academy_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["academy_id"], ["academies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "coach_programs",
        sa.Column("coach_id", sa.Integer(), nullable=False),
        sa.Column("program_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["coach_id"], ["coaches.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("coach_id", "program_id"),
    )
    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("birthday", sa.Date(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # Packages and recurrence
    op.create_table(
        "packages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("program_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("package_type", package_type_enum, nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("capacity", sa.Integer(), server_default="0", nullable=True),
        sa.Column("session_per_week", sa.Integer(), server_default="0", nullable=True),
        sa.Column("session_duration", sa.Integer(), nullable=True),
        sa.Column("memo", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("months", sa.JSON(), nullable=True),
        sa.Column("entry_fees", sa.Float(), server_default="0", nullable=True),
        sa.Column("entry_fees_explanation", sa.Text(), nullable=True),
        sa.Column("entry_fees_applied_months", sa.JSON(), nullable=True),
        sa.Column("entry_fees_start_date", sa.Date(), nullable=True),
        sa.Column("entry_fees_end_date", sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_packages_program_id", "packages", ["program_id"])

    op.create_table(
        "schedules",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("package_id", sa.Integer(), nullable=False),
        sa.Column("day", day_of_week_enum, nullable=False),
        sa.Column("from", sa.Time(), nullable=False),
        sa.Column("to", sa.Time(), nullable=False),
        sa.Column("memo", sa.Text(), nullable=True),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("start_birth_year", sa.Integer(), nullable=True),
        sa.Column("end_birth_year", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["package_id"], ["packages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_schedules_package_id", "schedules", ["package_id"])

    op.create_table(
        "discounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("program_id", sa.Integer(), nullable=False),
        sa.Column("type", discount_type_enum, nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_discounts_program_id", "discounts", ["program_id"])
    op.create_table(
        "package_discount",
        sa.Column("package_id", sa.Integer(), nullable=False),
        sa.Column("discount_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["package_id"], ["packages.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["discount_id"], ["discounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("package_id", "discount_id"),
    )

    # Bookings
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("package_id", sa.Integer(), nullable=False),
        sa.Column("coach_id", sa.Integer(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("package_price", sa.Float(), nullable=False),
        sa.Column("status", booking_status_enum, nullable=False),
        sa.Column(
            "entry_fees_paid", sa.Boolean(), server_default="false", nullable=False
        ),
        sa.Column("assessment_deduction_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["package_id"], ["packages.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["coach_id"], ["coaches.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["assessment_deduction_id"], ["bookings.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bookings_profile_id", "bookings", ["profile_id"])
    op.create_index("ix_bookings_package_id", "bookings", ["package_id"])
    op.create_index("ix_bookings_created_at", "bookings", ["created_at"])

    op.create_table(
        "booking_sessions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("booking_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("from", sa.Time(), nullable=False),
        sa.Column("to", sa.Time(), nullable=False),
        sa.Column("status", booking_session_status_enum, nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_booking_sessions_booking_id", "booking_sessions", ["booking_id"]
    )
    op.create_index("ix_booking_sessions_date", "booking_sessions", ["date"])

    op.create_table(
        "entry_fees_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("sport_id", sa.Integer(), nullable=False),
        sa.Column("program_id", sa.Integer(), nullable=False),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"]),
        sa.ForeignKeyConstraint(["sport_id"], ["sports.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_entry_fees_history_profile_id", "entry_fees_history", ["profile_id"]
    )

    # Calendar blocks
    op.create_table(
        "blocks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("academy_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("branch_scope", block_scope_enum, nullable=False),
        sa.Column("sport_scope", block_scope_enum, nullable=False),
        sa.Column("package_scope", block_scope_enum, nullable=False),
        sa.Column("program_scope", block_scope_enum, nullable=False),
        sa.Column("note", sa.String(length=255), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(["academy_id"], ["academies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_blocks_academy_id", "blocks", ["academy_id"])
    op.create_index("ix_blocks_date", "blocks", ["date"])
    for table, column in (
        ("branches", "branch_id"),
        ("sports", "sport_id"),
        ("packages", "package_id"),
        ("programs", "program_id"),
    ):
        op.create_table(
            f"block_{table}",
            sa.Column("block_id", sa.Integer(), nullable=False),
            sa.Column(column, sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["block_id"], ["blocks.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint([column], [f"{table}.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("block_id", column),
        )


def downgrade() -> None:
    """Downgrade schema - Drop booking service tables."""
    for table in ("programs", "packages", "sports", "branches"):
        op.drop_table(f"block_{table}")
    op.drop_table("blocks")
    op.drop_table("entry_fees_history")
    op.drop_table("booking_sessions")
    op.drop_table("bookings")
    op.drop_table("package_discount")
    op.drop_table("discounts")
    op.drop_table("schedules")
    op.drop_table("packages")
    op.drop_table("profiles")
    op.drop_table("coach_programs")
    op.drop_table("coaches")
    op.drop_table("programs")
    op.drop_table("sports")
    op.drop_table("branches")
    op.drop_table("academies")

    bind = op.get_bind()
    for enum_type in (
        block_scope_enum,
        booking_session_status_enum,
        booking_status_enum,
        discount_type_enum,
        day_of_week_enum,
        package_type_enum,
    ):
        enum_type.drop(bind, checkfirst=True)
