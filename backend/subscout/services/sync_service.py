"""Service applying bank-sync batches to stored transactions."""

import logging
import uuid

from sqlalchemy.orm import Session

from subscout.models.account import Account
from subscout.models.transaction import Transaction, TransactionSource
from subscout.schemas.sync import SyncBatch, SyncResult, SyncTransaction
from subscout.services.deduplication_service import generate_external_hash

logger = logging.getLogger(__name__)


def _find_by_external_id(db: Session, external_id: str) -> Transaction:
    return db.query(Transaction).filter(
        Transaction.source == TransactionSource.sync_feed,
        Transaction.external_id == external_id
    ).first()


def _write_fields(txn: Transaction, data: SyncTransaction) -> None:
    txn.account_id = data.account_id
    txn.date = data.date
    txn.amount = data.amount
    txn.raw_description = data.name
    txn.merchant_name = data.merchant_name
    txn.category = data.category
    txn.pending = data.pending


def upsert_sync_transaction(db: Session, data: SyncTransaction) -> bool:
    """Insert or update one synced transaction. Returns True if it was new."""
    txn = _find_by_external_id(db, data.transaction_id)
    created = txn is None

    if created:
        txn = Transaction(
            id=str(uuid.uuid4()),
            hash=generate_external_hash(TransactionSource.sync_feed.value, data.transaction_id),
            external_id=data.transaction_id,
            source=TransactionSource.sync_feed,
        )
        db.add(txn)

    _write_fields(txn, data)
    db.flush()
    return created


def apply_sync_batch(db: Session, batch: SyncBatch) -> SyncResult:
    """
    Apply added/modified/removed changes from one sync page.

    Modified entries that were never seen are inserted, and removals of
    unknown ids are ignored, so replaying a page is harmless.
    """
    account_ids = {t.account_id for t in batch.added + batch.modified}
    known = {
        a.id for a in db.query(Account.id).filter(Account.id.in_(account_ids)).all()
    } if account_ids else set()
    missing = account_ids - known
    if missing:
        raise ValueError(f"Unknown account(s): {', '.join(sorted(missing))}")

    added = 0
    modified = 0
    for data in batch.added + batch.modified:
        if upsert_sync_transaction(db, data):
            added += 1
        else:
            modified += 1

    removed = 0
    for external_id in batch.removed:
        txn = _find_by_external_id(db, external_id)
        if txn:
            db.delete(txn)
            removed += 1

    db.commit()
    logger.info(f"Sync batch applied: {added} added, {modified} modified, {removed} removed")
    return SyncResult(added=added, modified=modified, removed=removed)
