"""Calendar block endpoints."""

from fastapi import APIRouter, Depends, status
from libs.auth.models import AcademyContext
from libs.db.session import get_async_db
from services.booking_service.routers._shared import get_academy_context
from services.booking_service.schemas import BlockCreate, BlockResponse
from services.booking_service.services.block_ops import create_block, delete_block
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/academy/blocks", tags=["blocks"])


@router.post("", response_model=BlockResponse, status_code=status.HTTP_201_CREATED)
async def create(
    block_in: BlockCreate,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    return await create_block(db, ctx, block_in)


@router.delete("/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    block_id: int,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    await delete_block(db, ctx, block_id)
