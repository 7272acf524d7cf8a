"""
Pydantic schemas package.
"""

from subscout.schemas.account import (
    AccountBase,
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountList,
)
from subscout.schemas.import_file import (
    ImportMode,
    ImportStatusResponse,
    ImportLogResponse,
    MultiImportResponse,
)
from subscout.schemas.sync import (
    SyncTransaction,
    SyncBatch,
    SyncResult,
)
from subscout.schemas.subscription import (
    SubscriptionCharge,
    SubscriptionResponse,
    SubscriptionListResponse,
    SubscriptionOverrideUpdate,
    SubscriptionOverrideResponse,
)
from subscout.schemas.transaction import (
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
)

__all__ = [
    "AccountBase",
    "AccountCreate",
    "AccountUpdate",
    "AccountResponse",
    "AccountList",
    "ImportMode",
    "ImportStatusResponse",
    "ImportLogResponse",
    "MultiImportResponse",
    "SyncTransaction",
    "SyncBatch",
    "SyncResult",
    "SubscriptionCharge",
    "SubscriptionResponse",
    "SubscriptionListResponse",
    "SubscriptionOverrideUpdate",
    "SubscriptionOverrideResponse",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
]
