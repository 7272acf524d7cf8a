"""Service for subscription detection and user overrides."""

import calendar
import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from subscout.config import settings
from subscout.detection import (
    DetectionResult,
    DetectionThresholds,
    Frequency,
    OverrideRecord,
    normalize_merchant_key,
    run_detection,
)
from subscout.models.subscription_override import SubscriptionOverride
from subscout.sources import ImportedFileSource, SyncFeedSource

logger = logging.getLogger(__name__)

# Sentinel distinguishing "field not sent" from "field cleared"
UNSET = object()


def lookback_start(as_of: date, months: int) -> date:
    """Same day N calendar months earlier, clamped to the end of shorter months."""
    total = as_of.year * 12 + (as_of.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(as_of.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def get_overrides(db: Session) -> List[OverrideRecord]:
    """Current override set as engine records."""
    return [
        OverrideRecord(
            merchant_key=o.subscription_key,
            custom_name=o.custom_name,
            custom_amount=o.custom_amount,
            custom_frequency=o.custom_frequency,
            is_deleted=o.is_deleted,
        )
        for o in db.query(SubscriptionOverride).all()
    ]


def detect_subscriptions(
    db: Session,
    months: Optional[int] = None,
    as_of: Optional[date] = None,
    thresholds: Optional[DetectionThresholds] = None,
) -> DetectionResult:
    """
    Detect subscriptions from stored transactions of both sources.

    Loads the lookback window from each source, the override set, and hands
    them to the engine. Nothing is written.
    """
    as_of = as_of or date.today()
    months = months if months is not None else settings.detection_lookback_months
    since = lookback_start(as_of, months)
    thresholds = thresholds or DetectionThresholds.from_settings(settings)

    result = run_detection(
        imported=ImportedFileSource().load(db, since),
        synced=SyncFeedSource().load(db, since),
        overrides=get_overrides(db),
        thresholds=thresholds,
        as_of=as_of,
    )
    logger.info(f"Detected {result.count} subscriptions since {since}, {result.total_monthly}/month")
    return result


def _get_or_create_override(db: Session, subscription_key: str) -> SubscriptionOverride:
    override = db.query(SubscriptionOverride).filter(
        SubscriptionOverride.subscription_key == subscription_key
    ).first()
    if not override:
        override = SubscriptionOverride(
            id=str(uuid.uuid4()),
            subscription_key=subscription_key,
            is_deleted=False,
        )
        db.add(override)
    return override


def _normalize_key(subscription_key: str) -> str:
    key = normalize_merchant_key(subscription_key)
    if not key:
        raise ValueError("Subscription key is required")
    return key


def upsert_override(
    db: Session,
    subscription_key: str,
    custom_name=UNSET,
    custom_amount=UNSET,
    custom_frequency=UNSET,
) -> SubscriptionOverride:
    """
    Create or update the override for a subscription.

    Only fields that are passed are written; passing None clears a field
    back to its detected value.
    """
    key = _normalize_key(subscription_key)
    override = _get_or_create_override(db, key)

    if custom_name is not UNSET:
        override.custom_name = custom_name or None
    if custom_amount is not UNSET:
        override.custom_amount = Decimal(str(custom_amount)) if custom_amount is not None else None
    if custom_frequency is not UNSET:
        override.custom_frequency = Frequency(custom_frequency) if custom_frequency else None

    db.commit()
    db.refresh(override)
    logger.info(f"Updated override for {key!r}")
    return override


def delete_subscription(db: Session, subscription_key: str) -> SubscriptionOverride:
    """Soft delete: the merchant keeps being detected but is suppressed."""
    key = _normalize_key(subscription_key)
    override = _get_or_create_override(db, key)
    override.is_deleted = True

    db.commit()
    db.refresh(override)
    logger.info(f"Marked {key!r} as deleted")
    return override


def restore_subscription(db: Session, subscription_key: str) -> SubscriptionOverride:
    """Undo a soft delete, keeping any custom fields."""
    key = _normalize_key(subscription_key)
    override = db.query(SubscriptionOverride).filter(
        SubscriptionOverride.subscription_key == key
    ).first()
    if not override:
        raise ValueError(f"No override found for {key}")

    override.is_deleted = False
    db.commit()
    db.refresh(override)
    return override
