"""Unit tests for sequential discount application."""

from datetime import date
from types import SimpleNamespace

import pytest
from services.booking_service.models import DiscountType
from services.booking_service.pricing.discounts import (
    apply_discounts,
    get_price_after_active_discounts,
)
from tests.factories import DiscountFactory, seed_academy, seed_term_package


def _discount(id, discount_type, value):
    return SimpleNamespace(id=id, discount_type=discount_type, value=value)


@pytest.mark.unit
def test_no_discounts_keeps_price():
    assert apply_discounts([], 750) == 750


@pytest.mark.unit
def test_percentage_then_fixed_by_id():
    discounts = [
        _discount(2, DiscountType.FIXED, 50),
        _discount(1, DiscountType.PERCENTAGE, 10),
    ]

    # 750 * 0.9 - 50
    assert apply_discounts(discounts, 750) == pytest.approx(625)


@pytest.mark.unit
def test_fixed_then_percentage_by_id():
    discounts = [
        _discount(1, DiscountType.FIXED, 50),
        _discount(2, DiscountType.PERCENTAGE, 10),
    ]

    # (750 - 50) * 0.9
    assert apply_discounts(discounts, 750) == pytest.approx(630)


@pytest.mark.unit
def test_running_price_is_not_clamped_between_steps():
    discounts = [
        _discount(1, DiscountType.FIXED, 150),
        _discount(2, DiscountType.PERCENTAGE, 50),
    ]

    # (100 - 150) * 0.5
    assert apply_discounts(discounts, 100) == pytest.approx(-25)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_linked_discounts_apply_outside_their_window(db_session):
    seed = await seed_academy(db_session)
    program = seed["program"]
    package = await seed_term_package(db_session, program.id)
    discount = DiscountFactory.create(
        program.id, value=20.0, start_date=date(2025, 1, 1), end_date=date(2025, 1, 31)
    )
    discount.packages = [package]
    db_session.add(discount)
    await db_session.commit()

    price = await get_price_after_active_discounts(
        db_session, package_id=package.id, price=1000.0
    )

    assert price == pytest.approx(800)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_discounts_of_other_packages_do_not_apply(db_session):
    seed = await seed_academy(db_session)
    program = seed["program"]
    package = await seed_term_package(db_session, program.id)
    other = await seed_term_package(db_session, program.id, name="Term B")
    discount = DiscountFactory.create(program.id)
    discount.packages = [other]
    db_session.add(discount)
    await db_session.commit()

    price = await get_price_after_active_discounts(
        db_session, package_id=package.id, price=1000.0
    )

    assert price == 1000
