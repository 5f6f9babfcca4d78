"""Integration tests for package, discount and block management endpoints."""

from datetime import date

import pytest
from tests.factories import DiscountFactory, seed_academy, seed_term_package

OWNER = "academy-owner"


def _package_payload(program_id, **overrides):
    payload = {
        "program_id": program_id,
        "name": "Spring Term",
        "package_type": "term",
        "price": 1200,
        "capacity": 12,
        "session_per_week": 2,
        "start_date": "2025-03-03",
        "end_date": "2025-05-30",
        "entry_fees": 100,
        "schedules": [
            {"day": "mon", "from_time": "09:00", "to_time": "10:00"},
            {"day": "thu", "from_time": "17:00", "to_time": "18:00"},
        ],
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_package_with_recurrence(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)

    response = await booking_client.post(
        "/academy/packages", json=_package_payload(seed["program"].id)
    )

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["package_type"] == "term"
    assert [s["day"] for s in data["schedules"]] == ["mon", "thu"]
    assert data["schedules"][1]["from_time"] == "17:00:00"


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "overrides",
    [
        {
            "schedules": [
                {"day": "mon", "from_time": "09:00", "to_time": "10:00"},
                {"day": "mon", "from_time": "11:00", "to_time": "12:00"},
            ]
        },
        {"schedules": [{"day": "mon", "from_time": "10:00", "to_time": "09:00"}]},
        {"schedules": []},
        {"start_date": "2025-06-01"},
        {"package_type": "monthly", "months": None},
        {"package_type": "monthly", "months": ["march 2025"]},
        {"entry_fees_start_date": "2025-04-01", "entry_fees_end_date": "2025-03-01"},
    ],
)
async def test_invalid_packages_are_rejected(booking_client, db_session, overrides):
    seed = await seed_academy(db_session, user_id=OWNER)

    response = await booking_client.post(
        "/academy/packages", json=_package_payload(seed["program"].id, **overrides)
    )

    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_monthly_package(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)
    payload = _package_payload(
        seed["program"].id,
        package_type="monthly",
        name="Monthly Swim",
        start_date=None,
        end_date=None,
        months=["March 2025", "April 2025"],
        entry_fees_applied_months=["March 2025"],
    )

    response = await booking_client.post("/academy/packages", json=payload)

    assert response.status_code == 201, response.text
    assert response.json()["months"] == ["March 2025", "April 2025"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_package_replaces_schedules(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)
    package = await seed_term_package(db_session, seed["program"].id)
    payload = _package_payload(seed["program"].id, price=900)
    payload.pop("program_id")
    payload["schedules"] = [{"day": "sat", "from_time": "08:00", "to_time": "09:30"}]

    response = await booking_client.put(f"/academy/packages/{package.id}", json=payload)

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["price"] == 900
    assert [s["day"] for s in data["schedules"]] == ["sat"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_package(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)
    package = await seed_term_package(db_session, seed["program"].id)
    package_id = package.id

    response = await booking_client.delete(f"/academy/packages/{package_id}")
    assert response.status_code == 204

    response = await booking_client.get(f"/academy/packages/{package_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_package_of_other_academy_is_hidden(booking_client, db_session):
    await seed_academy(db_session, user_id=OWNER)
    other = await seed_academy(db_session)
    package = await seed_term_package(db_session, other["program"].id)

    response = await booking_client.get(f"/academy/packages/{package.id}")

    assert response.status_code == 404


# ---------------------------------------------------------------------------
# Discounts
# ---------------------------------------------------------------------------


def _discount_payload(program_id, package_ids, **overrides):
    payload = {
        "program_id": program_id,
        "discount_type": "percentage",
        "value": 15,
        "start_date": "2025-03-01",
        "end_date": "2025-03-31",
        "package_ids": package_ids,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_and_list_discounts(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)
    program_id = seed["program"].id
    package = await seed_term_package(db_session, program_id)

    response = await booking_client.post(
        "/academy/discounts", json=_discount_payload(program_id, [package.id])
    )
    assert response.status_code == 201, response.text
    assert response.json()["package_ids"] == [package.id]

    response = await booking_client.get(f"/academy/programs/{program_id}/discounts")
    assert response.status_code == 200
    assert len(response.json()) == 1


@pytest.mark.asyncio
@pytest.mark.integration
async def test_overlapping_discount_lists_package_names(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)
    program_id = seed["program"].id
    package = await seed_term_package(db_session, program_id, name="Spring Term")
    existing = DiscountFactory.create(
        program_id, start_date=date(2025, 3, 15), end_date=date(2025, 4, 15)
    )
    existing.packages = [package]
    db_session.add(existing)
    await db_session.commit()

    response = await booking_client.post(
        "/academy/discounts", json=_discount_payload(program_id, [package.id])
    )

    assert response.status_code == 400
    assert response.json()["detail"] == (
        "Some packages already have discounts in this date range: Spring Term"
    )


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_discount_ignores_its_own_window(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)
    program_id = seed["program"].id
    package = await seed_term_package(db_session, program_id)
    discount = DiscountFactory.create(
        program_id, start_date=date(2025, 3, 1), end_date=date(2025, 3, 31)
    )
    discount.packages = [package]
    db_session.add(discount)
    await db_session.commit()
    payload = _discount_payload(program_id, [package.id], value=25)
    payload.pop("program_id")

    response = await booking_client.put(f"/academy/discounts/{discount.id}", json=payload)

    assert response.status_code == 200, response.text
    assert response.json()["value"] == 25


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "overrides",
    [
        {"value": 0},
        {"value": 120},
        {"start_date": "2025-03-31", "end_date": "2025-03-31"},
    ],
)
async def test_invalid_discounts_are_rejected(booking_client, db_session, overrides):
    seed = await seed_academy(db_session, user_id=OWNER)

    response = await booking_client.post(
        "/academy/discounts",
        json=_discount_payload(seed["program"].id, [], **overrides),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_discount(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)
    discount = DiscountFactory.create(seed["program"].id)
    db_session.add(discount)
    await db_session.commit()

    response = await booking_client.delete(f"/academy/discounts/{discount.id}")

    assert response.status_code == 204


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


def _block_payload(**overrides):
    payload = {
        "date": "2025-03-10",
        "start_time": "12:00",
        "end_time": "13:00",
        "branches": "all",
        "sports": "all",
        "packages": "all",
        "programs": "all",
        "note": "Gala",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_block_with_specific_scope(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)

    response = await booking_client.post(
        "/academy/blocks", json=_block_payload(branches=[seed["branch"].id])
    )

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["branch_scope"] == "specific"
    assert data["sport_scope"] == "all"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_overlapping_block_is_rejected(booking_client, db_session):
    await seed_academy(db_session, user_id=OWNER)
    first = await booking_client.post("/academy/blocks", json=_block_payload())
    assert first.status_code == 201

    response = await booking_client.post(
        "/academy/blocks", json=_block_payload(start_time="12:30", end_time="14:00")
    )
    adjacent = await booking_client.post(
        "/academy/blocks", json=_block_payload(start_time="13:00", end_time="14:00")
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "There is already a block during this time period"
    assert adjacent.status_code == 201


@pytest.mark.asyncio
@pytest.mark.integration
async def test_block_end_must_follow_start(booking_client, db_session):
    await seed_academy(db_session, user_id=OWNER)

    response = await booking_client.post(
        "/academy/blocks", json=_block_payload(start_time="13:00", end_time="12:00")
    )

    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_block(booking_client, db_session):
    seed = await seed_academy(db_session, user_id=OWNER)
    created = await booking_client.post(
        "/academy/blocks", json=_block_payload(sports=[seed["sport"].id])
    )

    response = await booking_client.delete(f"/academy/blocks/{created.json()['id']}")

    assert response.status_code == 204
