"""One-time entry fee evaluation."""

from dataclasses import dataclass
from datetime import date

from libs.common.datetime_utils import month_label
from services.booking_service.models import EntryFeesHistory, Package, PackageType
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True)
class EntryFeeDecision:
    should_pay: bool
    amount: float = 0.0


NO_FEE = EntryFeeDecision(should_pay=False, amount=0.0)


def outside_entry_fee_window(package: Package, start_date: date) -> bool:
    if package.entry_fees_start_date and start_date < package.entry_fees_start_date:
        return True
    if package.entry_fees_end_date and start_date > package.entry_fees_end_date:
        return True
    return False


def evaluate_entry_fees(
    package: Package, start_date: date, *, already_paid: bool
) -> EntryFeeDecision:
    """Apply the entry-fee rules in order, stopping at the first that waives the fee."""
    if outside_entry_fee_window(package, start_date):
        return NO_FEE
    if already_paid:
        return NO_FEE
    if (
        package.effective_type == PackageType.MONTHLY
        and package.entry_fees_applied_months is not None
        and month_label(start_date) not in package.entry_fees_applied_months
    ):
        return NO_FEE
    return EntryFeeDecision(should_pay=True, amount=float(package.entry_fees or 0))


async def has_paid_entry_fees(
    db: AsyncSession, *, profile_id: int, sport_id: int, program_id: int
) -> bool:
    result = await db.execute(
        select(EntryFeesHistory.id)
        .where(
            EntryFeesHistory.profile_id == profile_id,
            EntryFeesHistory.sport_id == sport_id,
            EntryFeesHistory.program_id == program_id,
        )
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def check_entry_fees(
    db: AsyncSession,
    *,
    profile_id: int,
    sport_id: int,
    program_id: int,
    package: Package,
    start_date: date,
) -> EntryFeeDecision:
    """Decide whether the athlete owes the package's entry fee for this booking."""
    # Outside the window there is nothing to look up.
    if outside_entry_fee_window(package, start_date):
        return NO_FEE

    already_paid = await has_paid_entry_fees(
        db, profile_id=profile_id, sport_id=sport_id, program_id=program_id
    )
    return evaluate_entry_fees(package, start_date, already_paid=already_paid)
