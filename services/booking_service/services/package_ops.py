"""Package management. A package and its recurrence are written as one unit."""

from fastapi import HTTPException, status
from libs.auth.models import AcademyContext
from libs.common.logging import get_logger
from services.booking_service.models import Package, Program, Schedule
from services.booking_service.schemas import PackageCreate, PackageUpdate, ScheduleIn
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

PACKAGE_FIELDS = (
    "name",
    "package_type",
    "price",
    "capacity",
    "session_per_week",
    "session_duration",
    "memo",
    "start_date",
    "end_date",
    "months",
    "entry_fees",
    "entry_fees_explanation",
    "entry_fees_applied_months",
    "entry_fees_start_date",
    "entry_fees_end_date",
)


async def get_program(db: AsyncSession, ctx: AcademyContext, program_id: int) -> Program:
    result = await db.execute(
        select(Program).where(
            Program.id == program_id, Program.academy_id == ctx.academy_id
        )
    )
    program = result.scalar_one_or_none()
    if not program:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Program not found"
        )
    return program


async def get_package(db: AsyncSession, ctx: AcademyContext, package_id: int) -> Package:
    result = await db.execute(
        select(Package)
        .join(Program, Package.program_id == Program.id)
        .where(Package.id == package_id, Program.academy_id == ctx.academy_id)
        .options(selectinload(Package.schedules), selectinload(Package.discounts))
        .execution_options(populate_existing=True)
    )
    package = result.scalar_one_or_none()
    if not package:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Package not found"
        )
    return package


def _schedule_rows(schedules: list[ScheduleIn]) -> list[Schedule]:
    return [Schedule(**schedule.model_dump()) for schedule in schedules]


def _apply_fields(package: Package, package_in) -> None:
    for name in PACKAGE_FIELDS:
        setattr(package, name, getattr(package_in, name))


async def create_package(
    db: AsyncSession, ctx: AcademyContext, package_in: PackageCreate
) -> Package:
    program = await get_program(db, ctx, package_in.program_id)

    package = Package(program_id=program.id)
    _apply_fields(package, package_in)
    package.schedules = _schedule_rows(package_in.schedules)
    db.add(package)
    await db.commit()

    logger.info(
        "Created %s package %s for program %s",
        package.package_type.value,
        package.id,
        program.id,
    )
    return await get_package(db, ctx, package.id)


async def update_package(
    db: AsyncSession, ctx: AcademyContext, package_id: int, package_in: PackageUpdate
) -> Package:
    """Overwrite a package. Its schedule rows are replaced wholesale."""
    package = await get_package(db, ctx, package_id)
    _apply_fields(package, package_in)
    package.schedules = _schedule_rows(package_in.schedules)
    await db.commit()

    logger.info(
        "Updated package %s (%d schedule rows)", package_id, len(package_in.schedules)
    )
    return await get_package(db, ctx, package_id)


async def delete_package(db: AsyncSession, ctx: AcademyContext, package_id: int) -> None:
    package = await get_package(db, ctx, package_id)
    await db.delete(package)
    await db.commit()
    logger.info("Deleted package %s", package_id)
