"""
Statement-import transaction source.
"""

from subscout.detection.records import Origin, TransactionRecord
from subscout.models.transaction import Transaction, TransactionSource
from subscout.sources.base import BaseTransactionSource


class ImportedFileSource(BaseTransactionSource):
    """Transactions parsed from uploaded CSV/OFX statements"""

    origin = Origin.imported_file
    stored_as = TransactionSource.imported_file

    def to_record(self, txn: Transaction) -> TransactionRecord:
        # Statement rows rarely carry a separate merchant field; the
        # description is the merchant unless a user cleaned it up.
        return TransactionRecord(
            id=txn.id,
            amount=txn.amount,
            date=txn.date,
            raw_name=txn.raw_description,
            merchant_name=txn.merchant_name or None,
            category=txn.category,
            account_hint=txn.account.name if txn.account else None,
        )
