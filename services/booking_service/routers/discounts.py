"""Discount endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from libs.auth.models import AcademyContext
from libs.db.session import get_async_db
from services.booking_service.routers._shared import get_academy_context
from services.booking_service.schemas import (
    DiscountCreate,
    DiscountResponse,
    DiscountUpdate,
)
from services.booking_service.services.discount_ops import (
    create_discount,
    delete_discount,
    list_program_discounts,
    update_discount,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/academy", tags=["discounts"])


@router.get(
    "/programs/{program_id}/discounts", response_model=List[DiscountResponse]
)
async def list_discounts(
    program_id: int,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    return await list_program_discounts(db, ctx, program_id)


@router.post(
    "/discounts", response_model=DiscountResponse, status_code=status.HTTP_201_CREATED
)
async def create(
    discount_in: DiscountCreate,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    return await create_discount(db, ctx, discount_in)


@router.put("/discounts/{discount_id}", response_model=DiscountResponse)
async def update(
    discount_id: int,
    discount_in: DiscountUpdate,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    return await update_discount(db, ctx, discount_id, discount_in)


@router.delete("/discounts/{discount_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    discount_id: int,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    await delete_discount(db, ctx, discount_id)
