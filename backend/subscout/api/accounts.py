"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from subscout.database import get_db
from subscout.models import Account, Transaction, TransactionSource
from subscout.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountList,
    AccountSources,
    SourceActivity,
)

router = APIRouter(prefix="/accounts", tags=["accounts"])


def _get_account_or_404(db: Session, account_id: str) -> Account:
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


@router.get("", response_model=AccountList)
def list_accounts(
    include_inactive: bool = False,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """List accounts that statements and the sync feed can attach to."""
    query = db.query(Account)
    if not include_inactive:
        query = query.filter(Account.is_active == True)

    total = query.count()
    accounts = query.order_by(Account.created_at).offset(skip).limit(limit).all()

    return AccountList(
        items=[AccountResponse.model_validate(a) for a in accounts],
        total=total
    )


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    account: AccountCreate,
    db: Session = Depends(get_db)
):
    """Create a new account. Name plus mask must be unique among active accounts."""
    clash = db.query(Account).filter(
        Account.is_active == True,
        Account.name == account.name,
        Account.mask == account.mask
    ).first()
    if clash:
        raise HTTPException(status_code=409, detail=f"Account {clash.display_hint} already exists")

    db_account = Account(**account.model_dump())
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    return AccountResponse.model_validate(db_account)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    db: Session = Depends(get_db)
):
    return AccountResponse.model_validate(_get_account_or_404(db, account_id))


@router.get("/{account_id}/sources", response_model=AccountSources)
def get_account_sources(
    account_id: str,
    db: Session = Depends(get_db)
):
    """Per-source transaction counts and date coverage, to spot a feed that stopped."""
    _get_account_or_404(db, account_id)

    rows = db.query(
        Transaction.source,
        func.count(Transaction.id),
        func.min(Transaction.date),
        func.max(Transaction.date),
    ).filter(
        Transaction.account_id == account_id
    ).group_by(Transaction.source).all()
    by_source = {row[0]: row for row in rows}

    sources = []
    for source in TransactionSource:
        row = by_source.get(source)
        if row is None:
            sources.append(SourceActivity(source=source, transaction_count=0))
        else:
            sources.append(SourceActivity(
                source=source, transaction_count=row[1], first_date=row[2], last_date=row[3]
            ))

    return AccountSources(account_id=account_id, sources=sources)


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    account_update: AccountUpdate,
    db: Session = Depends(get_db)
):
    account = _get_account_or_404(db, account_id)

    for field, value in account_update.model_dump(exclude_unset=True).items():
        setattr(account, field, value)

    db.commit()
    db.refresh(account)
    return AccountResponse.model_validate(account)


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: str,
    db: Session = Depends(get_db)
):
    """Deactivate an account. Its transactions stay and keep feeding detection."""
    account = _get_account_or_404(db, account_id)
    account.is_active = False
    db.commit()
    return None
