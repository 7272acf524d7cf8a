"""Pydantic schemas for detected subscriptions and overrides."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from subscout.detection.candidates import round_money
from subscout.detection.records import DetectionResult, FinalSubscriptionView, Frequency, Origin


class SubscriptionCharge(BaseModel):
    amount: float
    date: date
    account_hint: Optional[str] = None


class SubscriptionResponse(BaseModel):
    subscription_key: str
    merchant_name: str
    amount: float
    frequency: Frequency
    monthly_equivalent: float
    confidence: float
    last_charge: date
    next_expected: Optional[date] = None
    category: Optional[str] = None
    account_hint: Optional[str] = None
    transaction_count: int
    origin: Origin
    is_user_modified: bool
    transactions: List[SubscriptionCharge] = []

    @classmethod
    def from_view(cls, view: FinalSubscriptionView, monthly_equivalent: Decimal) -> "SubscriptionResponse":
        return cls(
            subscription_key=view.subscription_key,
            merchant_name=view.display_name,
            amount=float(view.amount),
            frequency=view.frequency,
            monthly_equivalent=float(round_money(monthly_equivalent)),
            confidence=view.confidence,
            last_charge=view.last_charge,
            next_expected=view.next_expected,
            category=view.category,
            account_hint=view.account_hint,
            transaction_count=view.transaction_count,
            origin=view.origin,
            is_user_modified=view.is_user_modified,
            transactions=[
                SubscriptionCharge(amount=float(c.amount), date=c.date, account_hint=c.account_hint)
                for c in view.history
            ],
        )


class SubscriptionListResponse(BaseModel):
    subscriptions: List[SubscriptionResponse]
    total_monthly: float
    count: int

    @classmethod
    def from_result(cls, result: DetectionResult) -> "SubscriptionListResponse":
        return cls(
            subscriptions=[
                SubscriptionResponse.from_view(view, result.monthly_equivalents[view.subscription_key])
                for view in result.subscriptions
            ],
            total_monthly=float(result.total_monthly),
            count=result.count,
        )


class SubscriptionOverrideUpdate(BaseModel):
    """Fields left out of the request body are not touched."""
    custom_name: Optional[str] = Field(None, max_length=255)
    custom_amount: Optional[Decimal] = Field(None, gt=0)
    custom_frequency: Optional[Frequency] = None


class SubscriptionOverrideResponse(BaseModel):
    subscription_key: str
    custom_name: Optional[str] = None
    custom_amount: Optional[Decimal] = None
    custom_frequency: Optional[Frequency] = None
    is_deleted: bool
    updated_at: datetime

    class Config:
        from_attributes = True
