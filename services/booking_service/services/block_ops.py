"""Blackout blocks on the academy calendar."""

from typing import Union

from fastapi import HTTPException, status
from libs.auth.models import AcademyContext
from libs.common.logging import get_logger
from services.booking_service.models import (
    Block,
    BlockScope,
    Branch,
    Package,
    Program,
    Sport,
)
from services.booking_service.schemas import BlockCreate
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

OVERLAP_MESSAGE = "There is already a block during this time period"


async def _scoped(
    db: AsyncSession, model, selection: Union[str, list[int]]
) -> tuple[BlockScope, list]:
    if selection == "all":
        return BlockScope.ALL, []
    ids = set(selection)
    result = await db.execute(select(model).where(model.id.in_(ids)))
    rows = list(result.scalars().all())
    if len(rows) != len(ids):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown {model.__tablename__} in block scope",
        )
    return BlockScope.SPECIFIC, rows


async def create_block(
    db: AsyncSession, ctx: AcademyContext, block_in: BlockCreate
) -> Block:
    """Create a block unless it overlaps another block of the academy that day."""
    existing = await db.execute(
        select(Block.id)
        .where(
            Block.academy_id == ctx.academy_id,
            Block.block_date == block_in.date,
            Block.start_time < block_in.end_time,
            Block.end_time > block_in.start_time,
        )
        .limit(1)
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=OVERLAP_MESSAGE
        )

    branch_scope, branches = await _scoped(db, Branch, block_in.branches)
    sport_scope, sports = await _scoped(db, Sport, block_in.sports)
    package_scope, packages = await _scoped(db, Package, block_in.packages)
    program_scope, programs = await _scoped(db, Program, block_in.programs)

    block = Block(
        academy_id=ctx.academy_id,
        block_date=block_in.date,
        start_time=block_in.start_time,
        end_time=block_in.end_time,
        branch_scope=branch_scope,
        sport_scope=sport_scope,
        package_scope=package_scope,
        program_scope=program_scope,
        note=block_in.note,
        branches=branches,
        sports=sports,
        packages=packages,
        programs=programs,
    )
    db.add(block)
    await db.commit()
    logger.info(
        "Created block %s on %s %s-%s for academy %s",
        block.id,
        block.block_date,
        block.start_time,
        block.end_time,
        ctx.academy_id,
    )
    return block


async def delete_block(db: AsyncSession, ctx: AcademyContext, block_id: int) -> None:
    result = await db.execute(
        select(Block)
        .where(Block.id == block_id, Block.academy_id == ctx.academy_id)
        .options(
            selectinload(Block.branches),
            selectinload(Block.sports),
            selectinload(Block.packages),
            selectinload(Block.programs),
        )
    )
    block = result.scalar_one_or_none()
    if not block:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Block not found"
        )
    await db.delete(block)
    await db.commit()
    logger.info("Deleted block %s", block_id)
