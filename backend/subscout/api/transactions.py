"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from typing import Optional
from datetime import date

from subscout.database import get_db
from subscout.detection import merchant_key, normalize_merchant_key
from subscout.models.transaction import Transaction, TransactionSource
from subscout.schemas.transaction import (
    TransactionResponse,
    TransactionUpdate,
    TransactionListResponse
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    account_id: Optional[str] = None,
    source: Optional[TransactionSource] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    merchant: Optional[str] = Query(None, description="Subscription key, lists the charges behind it"),
    pending: Optional[bool] = None,
    include_excluded: bool = True,
    db: Session = Depends(get_db)
):
    """List transactions with filtering and pagination"""
    query = db.query(Transaction)

    if account_id:
        query = query.filter(Transaction.account_id == account_id)
    if source:
        query = query.filter(Transaction.source == source)
    if start_date:
        query = query.filter(Transaction.date >= start_date)
    if end_date:
        query = query.filter(Transaction.date <= end_date)
    if pending is not None:
        query = query.filter(Transaction.pending == pending)
    if not include_excluded:
        query = query.filter(Transaction.is_excluded == False)

    key = normalize_merchant_key(merchant)
    if key:
        # Narrow in SQL, then match the exact key the detector builds
        name = func.coalesce(func.nullif(Transaction.merchant_name, ""), Transaction.raw_description)
        pattern = "%" + "%".join(_escape_like(word) for word in key.split(" ")) + "%"
        query = query.filter(name.ilike(pattern, escape="\\"))
    if search:
        search_term = f"%{search}%"
        query = query.filter(
            or_(
                Transaction.raw_description.ilike(search_term),
                Transaction.merchant_name.ilike(search_term)
            )
        )

    query = query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
    offset = (page - 1) * per_page

    if key:
        matches = [t for t in query.all() if merchant_key(t.merchant_name, t.raw_description) == key]
        total = len(matches)
        transactions = matches[offset:offset + per_page]
    else:
        total = query.count()
        transactions = query.offset(offset).limit(per_page).all()

    pages = (total + per_page - 1) // per_page

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        total=total,
        page=page,
        pages=pages
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    db: Session = Depends(get_db)
):
    """Get a single transaction"""
    transaction = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return TransactionResponse.model_validate(transaction)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    db: Session = Depends(get_db)
):
    """Update a transaction. Excluded transactions are left out of detection."""
    transaction = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")

    update_data = update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(transaction, field, value)

    db.commit()
    db.refresh(transaction)

    return TransactionResponse.model_validate(transaction)
