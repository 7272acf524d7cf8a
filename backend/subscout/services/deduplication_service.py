"""
Deduplication of stored transactions.

Statement rows have no stable id, so they are fingerprinted by content.
Sync rows carry the feed's own id and are fingerprinted by that instead,
which lets an amended sync row keep its identity.
"""

import hashlib
from datetime import date
from decimal import Decimal
from typing import Iterable, Set

from sqlalchemy.orm import Session

from subscout.models.transaction import Transaction


def generate_transaction_hash(
    txn_date: date,
    amount: Decimal,
    raw_description: str,
    account_id: str
) -> str:
    """
    Content fingerprint of a statement row.
    Uses date|amount|description|account_id
    """
    components = [
        txn_date.isoformat(),
        str(amount),
        raw_description.strip().lower(),
        str(account_id)
    ]
    return hashlib.sha256("|".join(components).encode()).hexdigest()


def generate_external_hash(source: str, external_id: str) -> str:
    """Fingerprint of a row that arrives with its own stable id"""
    return hashlib.sha256(f"{source}#{external_id}".encode()).hexdigest()


def existing_hashes(db: Session, hashes: Iterable[str]) -> Set[str]:
    """Subset of the given hashes already stored, in one query"""
    wanted = set(hashes)
    if not wanted:
        return set()
    rows = db.query(Transaction.hash).filter(Transaction.hash.in_(wanted)).all()
    return {row.hash for row in rows}
