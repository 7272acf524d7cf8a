"""
Base class for transaction sources.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import List

from sqlalchemy.orm import Session, joinedload

from subscout.detection.records import Origin, TransactionRecord
from subscout.models.transaction import Transaction, TransactionSource

logger = logging.getLogger(__name__)


class BaseTransactionSource(ABC):
    """
    Loads one source's stored transactions as engine records.

    Enforces the engine's preconditions at the boundary: settled,
    not excluded, inside the lookback window, and outflows only.
    """

    @property
    @abstractmethod
    def origin(self) -> Origin:
        """Origin tag for candidates built from this source"""
        pass

    @property
    @abstractmethod
    def stored_as(self) -> TransactionSource:
        """Source column value of this source's rows"""
        pass

    @abstractmethod
    def to_record(self, txn: Transaction) -> TransactionRecord:
        """Convert a stored row into an engine record"""
        pass

    def load(self, db: Session, since: date) -> List[TransactionRecord]:
        rows = db.query(Transaction).options(joinedload(Transaction.account)).filter(
            Transaction.source == self.stored_as,
            Transaction.date >= since,
            Transaction.pending == False,
            Transaction.is_excluded == False,
            Transaction.amount > 0,
        ).order_by(Transaction.date, Transaction.created_at, Transaction.id).all()

        logger.info(f"Loaded {len(rows)} {self.stored_as.value} transactions since {since}")
        return [self.to_record(t) for t in rows]
