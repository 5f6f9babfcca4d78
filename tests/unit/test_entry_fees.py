"""Unit tests for the one-time entry fee rules."""

from datetime import date

import pytest
from services.booking_service.models import EntryFeesHistory, PackageType
from services.booking_service.pricing.entry_fees import (
    EntryFeeDecision,
    check_entry_fees,
    evaluate_entry_fees,
)
from tests.factories import PackageFactory, seed_academy

START = date(2025, 3, 10)


def _package(**overrides):
    defaults = {"program_id": 1, "entry_fees": 50.0}
    defaults.update(overrides)
    return PackageFactory.create(**defaults)


# ---------------------------------------------------------------------------
# evaluate_entry_fees
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_fee_due_when_never_paid():
    decision = evaluate_entry_fees(_package(), START, already_paid=False)

    assert decision == EntryFeeDecision(should_pay=True, amount=50.0)


@pytest.mark.unit
def test_no_fee_once_paid():
    decision = evaluate_entry_fees(_package(), START, already_paid=True)

    assert decision.should_pay is False
    assert decision.amount == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "window",
    [
        {"entry_fees_start_date": date(2025, 3, 11)},
        {"entry_fees_end_date": date(2025, 3, 9)},
    ],
)
def test_no_fee_outside_window(window):
    decision = evaluate_entry_fees(_package(**window), START, already_paid=False)

    assert decision.should_pay is False


@pytest.mark.unit
def test_window_bounds_are_inclusive():
    package = _package(entry_fees_start_date=START, entry_fees_end_date=START)

    assert evaluate_entry_fees(package, START, already_paid=False).should_pay


@pytest.mark.unit
def test_monthly_fee_only_in_applied_months():
    package = _package(
        package_type=PackageType.MONTHLY,
        months=["March 2025", "April 2025"],
        entry_fees_applied_months=["April 2025"],
    )

    assert not evaluate_entry_fees(package, START, already_paid=False).should_pay
    assert evaluate_entry_fees(
        package, date(2025, 4, 7), already_paid=False
    ).should_pay


@pytest.mark.unit
def test_monthly_without_applied_months_always_charges():
    package = _package(package_type=PackageType.MONTHLY, months=["March 2025"])

    assert evaluate_entry_fees(package, START, already_paid=False).should_pay


@pytest.mark.unit
def test_applied_months_ignored_for_term_packages():
    package = _package(entry_fees_applied_months=["April 2025"])

    assert evaluate_entry_fees(package, START, already_paid=False).should_pay


# ---------------------------------------------------------------------------
# check_entry_fees (history lookup)
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_history_row_for_same_sport_and_program_waives_fee(db_session):
    seed = await seed_academy(db_session)
    program, profile = seed["program"], seed["profile"]
    db_session.add(
        EntryFeesHistory(
            profile_id=profile.id, sport_id=program.sport_id, program_id=program.id
        )
    )
    await db_session.commit()

    decision = await check_entry_fees(
        db_session,
        profile_id=profile.id,
        sport_id=program.sport_id,
        program_id=program.id,
        package=_package(program_id=program.id),
        start_date=START,
    )

    assert decision.should_pay is False


@pytest.mark.asyncio
@pytest.mark.unit
async def test_history_for_other_program_still_charges(db_session):
    seed = await seed_academy(db_session)
    other = await seed_academy(db_session)
    profile = seed["profile"]
    db_session.add(
        EntryFeesHistory(
            profile_id=profile.id,
            sport_id=other["program"].sport_id,
            program_id=other["program"].id,
        )
    )
    await db_session.commit()

    decision = await check_entry_fees(
        db_session,
        profile_id=profile.id,
        sport_id=seed["program"].sport_id,
        program_id=seed["program"].id,
        package=_package(),
        start_date=START,
    )

    assert decision == EntryFeeDecision(should_pay=True, amount=50.0)
