"""Sequential application of package discounts."""

from typing import Iterable

from services.booking_service.models import Discount, DiscountType, package_discount
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


def apply_discounts(discounts: Iterable[Discount], price: float) -> float:
    """
    Reduce ``price`` by each discount in ascending id order: percentages
    scale the running price, fixed amounts are subtracted.
    """
    discounted = float(price)
    for discount in sorted(discounts, key=lambda d: d.id):
        if discount.discount_type == DiscountType.PERCENTAGE:
            discounted *= 1 - discount.value / 100
        else:
            discounted -= discount.value
    return discounted


async def get_package_discounts(db: AsyncSession, package_id: int) -> list[Discount]:
    result = await db.execute(
        select(Discount)
        .join(package_discount, package_discount.c.discount_id == Discount.id)
        .where(package_discount.c.package_id == package_id)
        .order_by(Discount.id)
    )
    return list(result.scalars().all())


async def get_price_after_active_discounts(
    db: AsyncSession, *, package_id: int, price: float
) -> float:
    """Apply every discount linked to the package."""
    discounts = await get_package_discounts(db, package_id)
    return apply_discounts(discounts, price)
