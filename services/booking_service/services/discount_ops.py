"""Discount management for a program's packages."""

from datetime import date
from typing import Iterable, Optional

from fastapi import HTTPException, status
from libs.auth.models import AcademyContext
from libs.common.logging import get_logger
from services.booking_service.models import Discount, Package, Program
from services.booking_service.schemas import DiscountCreate, DiscountUpdate
from services.booking_service.services.package_ops import get_program
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

OVERLAP_MESSAGE = "Some packages already have discounts in this date range"


async def _load_discount(
    db: AsyncSession, ctx: AcademyContext, discount_id: int
) -> Discount:
    result = await db.execute(
        select(Discount)
        .join(Program, Discount.program_id == Program.id)
        .where(Discount.id == discount_id, Program.academy_id == ctx.academy_id)
        .options(selectinload(Discount.packages))
        .execution_options(populate_existing=True)
    )
    discount = result.scalar_one_or_none()
    if not discount:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Discount not found"
        )
    return discount


async def _load_packages(
    db: AsyncSession, program_id: int, package_ids: Iterable[int]
) -> list[Package]:
    wanted = set(package_ids)
    if not wanted:
        return []
    result = await db.execute(
        select(Package).where(Package.id.in_(wanted), Package.program_id == program_id)
    )
    packages = list(result.scalars().all())
    if len(packages) != len(wanted):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Packages must belong to the discount's program",
        )
    return packages


async def find_overlapping_packages(
    db: AsyncSession,
    *,
    program_id: int,
    package_ids: Iterable[int],
    start_date: date,
    end_date: date,
    exclude_id: Optional[int] = None,
) -> list[str]:
    """Names of the given packages already discounted somewhere in the window."""
    wanted = set(package_ids)
    query = (
        select(Discount)
        .where(
            Discount.program_id == program_id,
            Discount.end_date >= start_date,
            Discount.start_date <= end_date,
        )
        .options(selectinload(Discount.packages))
        .order_by(Discount.id)
    )
    if exclude_id is not None:
        query = query.where(Discount.id != exclude_id)
    result = await db.execute(query)
    return [
        package.name
        for discount in result.scalars().all()
        for package in discount.packages
        if package.id in wanted
    ]


async def _ensure_no_overlap(
    db: AsyncSession, program_id: int, discount_in, exclude_id: Optional[int] = None
) -> None:
    names = await find_overlapping_packages(
        db,
        program_id=program_id,
        package_ids=discount_in.package_ids,
        start_date=discount_in.start_date,
        end_date=discount_in.end_date,
        exclude_id=exclude_id,
    )
    if names:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{OVERLAP_MESSAGE}: {', '.join(names)}",
        )


async def list_program_discounts(
    db: AsyncSession, ctx: AcademyContext, program_id: int
) -> list[Discount]:
    await get_program(db, ctx, program_id)
    result = await db.execute(
        select(Discount)
        .where(Discount.program_id == program_id)
        .options(selectinload(Discount.packages))
        .order_by(Discount.start_date, Discount.id)
    )
    return list(result.scalars().all())


async def create_discount(
    db: AsyncSession, ctx: AcademyContext, discount_in: DiscountCreate
) -> Discount:
    program = await get_program(db, ctx, discount_in.program_id)
    await _ensure_no_overlap(db, program.id, discount_in)
    packages = await _load_packages(db, program.id, discount_in.package_ids)

    discount = Discount(
        program_id=program.id,
        discount_type=discount_in.discount_type,
        value=discount_in.value,
        start_date=discount_in.start_date,
        end_date=discount_in.end_date,
        packages=packages,
    )
    db.add(discount)
    await db.commit()
    logger.info(
        "Created %s discount %s on program %s for packages %s",
        discount.discount_type.value,
        discount.id,
        program.id,
        [p.id for p in packages],
    )
    return await _load_discount(db, ctx, discount.id)


async def update_discount(
    db: AsyncSession, ctx: AcademyContext, discount_id: int, discount_in: DiscountUpdate
) -> Discount:
    discount = await _load_discount(db, ctx, discount_id)
    await _ensure_no_overlap(
        db, discount.program_id, discount_in, exclude_id=discount.id
    )
    packages = await _load_packages(db, discount.program_id, discount_in.package_ids)

    discount.discount_type = discount_in.discount_type
    discount.value = discount_in.value
    discount.start_date = discount_in.start_date
    discount.end_date = discount_in.end_date
    discount.packages = packages
    await db.commit()
    logger.info("Updated discount %s", discount_id)
    return await _load_discount(db, ctx, discount_id)


async def delete_discount(
    db: AsyncSession, ctx: AcademyContext, discount_id: int
) -> None:
    discount = await _load_discount(db, ctx, discount_id)
    await db.delete(discount)
    await db.commit()
    logger.info("Deleted discount %s", discount_id)
