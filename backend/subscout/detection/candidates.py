"""Turns an accepted cohort into a candidate subscription."""

from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from subscout.detection.records import (
    CandidateSubscription,
    ChargeRecord,
    Classification,
    MerchantCohort,
    Origin,
)

CENTS = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def title_case(name: str) -> str:
    """Capitalize each word, lowercasing the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split())


def project_next_charge(last_charge: date, interval_days: int, as_of: date) -> Optional[date]:
    """Next expected charge, or None once that date has already passed."""
    next_charge = last_charge + timedelta(days=interval_days)
    return next_charge if next_charge > as_of else None


def build_candidate(
    cohort: MerchantCohort,
    classification: Classification,
    origin: Origin,
    as_of: date,
) -> CandidateSubscription:
    latest = cohort.transactions[-1]

    history = tuple(
        ChargeRecord(amount=t.amount, date=t.date, account_hint=t.account_hint)
        for t in reversed(cohort.transactions)
    )

    return CandidateSubscription(
        merchant_key=cohort.key,
        display_name=title_case(latest.merchant_name or latest.raw_name or cohort.key),
        amount=round_money(classification.amount_stats.average),
        frequency=classification.frequency,
        confidence=classification.confidence,
        last_charge=latest.date,
        next_expected=project_next_charge(latest.date, classification.expected_interval_days, as_of),
        category=latest.category,
        account_hint=latest.account_hint,
        transaction_count=len(cohort.transactions),
        history=history,
        origin=origin,
    )
