"""API endpoints for detected subscriptions."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from subscout.database import get_db
from subscout.schemas.subscription import (
    SubscriptionListResponse,
    SubscriptionOverrideUpdate,
    SubscriptionOverrideResponse,
)
from subscout.services import subscription_service

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("", response_model=SubscriptionListResponse)
def list_subscriptions(
    months: Optional[int] = Query(None, ge=1, le=36, description="Lookback window in months"),
    db: Session = Depends(get_db)
):
    """Detect subscriptions from imported and synced transactions."""
    result = subscription_service.detect_subscriptions(db, months=months)

    return SubscriptionListResponse.from_result(result)


@router.patch("/{subscription_key}", response_model=SubscriptionOverrideResponse)
def update_subscription(
    subscription_key: str,
    update: SubscriptionOverrideUpdate,
    db: Session = Depends(get_db)
):
    """Override the name, amount or frequency of a detected subscription."""
    try:
        override = subscription_service.upsert_override(
            db, subscription_key, **update.model_dump(exclude_unset=True)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SubscriptionOverrideResponse.model_validate(override)


@router.delete("/{subscription_key}", response_model=SubscriptionOverrideResponse)
def delete_subscription(
    subscription_key: str,
    db: Session = Depends(get_db)
):
    """Hide a subscription. Detection keeps finding it; the override keeps hiding it."""
    try:
        override = subscription_service.delete_subscription(db, subscription_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SubscriptionOverrideResponse.model_validate(override)


@router.post("/{subscription_key}/restore", response_model=SubscriptionOverrideResponse)
def restore_subscription(
    subscription_key: str,
    db: Session = Depends(get_db)
):
    """Bring back a hidden subscription."""
    try:
        override = subscription_service.restore_subscription(db, subscription_key)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SubscriptionOverrideResponse.model_validate(override)
