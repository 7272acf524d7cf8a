"""
Database models package.
"""

from subscout.models.account import Account, AccountType
from subscout.models.transaction import Transaction, TransactionSource
from subscout.models.subscription_override import SubscriptionOverride
from subscout.models.import_log import ImportLog, ImportStatus

__all__ = [
    "Account",
    "AccountType",
    "Transaction",
    "TransactionSource",
    "SubscriptionOverride",
    "ImportLog",
    "ImportStatus",
]
