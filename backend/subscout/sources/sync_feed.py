"""
Bank-sync transaction source.
"""

from subscout.detection.records import Origin, TransactionRecord
from subscout.models.transaction import Transaction, TransactionSource
from subscout.sources.base import BaseTransactionSource


class SyncFeedSource(BaseTransactionSource):
    """Transactions delivered by the bank-sync feed"""

    origin = Origin.sync_feed
    stored_as = TransactionSource.sync_feed

    def to_record(self, txn: Transaction) -> TransactionRecord:
        return TransactionRecord(
            id=txn.external_id or txn.id,
            amount=txn.amount,
            date=txn.date,
            raw_name=txn.raw_description,
            merchant_name=txn.merchant_name,
            category=txn.category,
            account_hint=txn.account.display_hint if txn.account else None,
        )
