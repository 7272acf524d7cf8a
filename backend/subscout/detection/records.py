"""
Value records passed between the detection stages.

Every record is immutable. A detection run builds them from the current
transaction snapshot and discards them once the final list is returned.
"""

import enum
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class Frequency(str, enum.Enum):
    """Billing cadence of a recurring charge."""
    weekly = "weekly"
    biweekly = "bi-weekly"
    monthly = "monthly"
    quarterly = "quarterly"
    yearly = "yearly"


class Origin(str, enum.Enum):
    """Which pipeline produced a candidate."""
    imported_file = "importedFile"
    sync_feed = "syncFeed"
    merged = "merged"


class TransactionRecord(BaseModel):
    """Normalized transaction handed to the engine. Positive amount = outflow."""
    model_config = ConfigDict(frozen=True)

    id: str
    amount: Decimal
    date: date
    raw_name: str
    merchant_name: Optional[str] = None
    category: Optional[str] = None
    account_hint: Optional[str] = None


class MerchantCohort(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    transactions: Tuple[TransactionRecord, ...]


class AmountStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    average: Decimal
    minimum: Decimal
    maximum: Decimal
    variance: float


class Classification(BaseModel):
    """Accepted outcome of classifying one cohort."""
    model_config = ConfigDict(frozen=True)

    frequency: Frequency
    expected_interval_days: int
    confidence: float
    amount_stats: AmountStats


class ChargeRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Decimal
    date: date
    account_hint: Optional[str] = None


class CandidateSubscription(BaseModel):
    model_config = ConfigDict(frozen=True)

    merchant_key: str
    display_name: str
    amount: Decimal
    frequency: Frequency
    confidence: float
    last_charge: date
    next_expected: Optional[date] = None
    category: Optional[str] = None
    account_hint: Optional[str] = None
    transaction_count: int
    history: Tuple[ChargeRecord, ...]
    origin: Origin


class OverrideRecord(BaseModel):
    """A user correction keyed by MerchantKey."""
    model_config = ConfigDict(frozen=True)

    merchant_key: str
    custom_name: Optional[str] = None
    custom_amount: Optional[Decimal] = None
    custom_frequency: Optional[Frequency] = None
    is_deleted: bool = False


class FinalSubscriptionView(CandidateSubscription):
    subscription_key: str
    is_user_modified: bool = False


class AggregateTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_equivalents: Dict[str, Decimal]
    total_monthly: Decimal


class DetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    subscriptions: List[FinalSubscriptionView]
    monthly_equivalents: Dict[str, Decimal]
    total_monthly: Decimal
    count: int
