"""Monthly-equivalent cost per subscription and the portfolio total."""

from decimal import Decimal
from typing import Dict, Iterable

from subscout.detection.candidates import round_money
from subscout.detection.records import AggregateTotals, FinalSubscriptionView, Frequency


def monthly_equivalent(amount: Decimal, frequency: Frequency) -> Decimal:
    """Unrounded cost of one charge at the given cadence, per month."""
    if frequency == Frequency.weekly:
        return amount * Decimal("4.33")
    elif frequency == Frequency.biweekly:
        return amount * Decimal("2.17")
    elif frequency == Frequency.monthly:
        return amount
    elif frequency == Frequency.quarterly:
        return amount / 3
    elif frequency == Frequency.yearly:
        return amount / 12
    raise ValueError(f"Unknown frequency: {frequency}")


def aggregate(views: Iterable[FinalSubscriptionView]) -> AggregateTotals:
    """Sum monthly equivalents, rounding once at the end."""
    per_entry: Dict[str, Decimal] = {
        view.subscription_key: monthly_equivalent(view.amount, view.frequency)
        for view in views
    }
    total = sum(per_entry.values(), Decimal("0"))
    return AggregateTotals(monthly_equivalents=per_entry, total_monthly=round_money(total))
