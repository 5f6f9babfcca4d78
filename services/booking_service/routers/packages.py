"""Package endpoints."""

from fastapi import APIRouter, Depends, status
from libs.auth.models import AcademyContext
from libs.db.session import get_async_db
from services.booking_service.routers._shared import get_academy_context
from services.booking_service.schemas import (
    PackageCreate,
    PackageResponse,
    PackageUpdate,
)
from services.booking_service.services.package_ops import (
    create_package,
    delete_package,
    get_package,
    update_package,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/academy/packages", tags=["packages"])


@router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
async def create(
    package_in: PackageCreate,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    return await create_package(db, ctx, package_in)


@router.get("/{package_id}", response_model=PackageResponse)
async def retrieve(
    package_id: int,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    return await get_package(db, ctx, package_id)


@router.put("/{package_id}", response_model=PackageResponse)
async def update(
    package_id: int,
    package_in: PackageUpdate,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    return await update_package(db, ctx, package_id, package_in)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    package_id: int,
    ctx: AcademyContext = Depends(get_academy_context),
    db: AsyncSession = Depends(get_async_db),
):
    await delete_package(db, ctx, package_id)
