"""
Sync feed schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from decimal import Decimal


class SyncTransaction(BaseModel):
    """One transaction as delivered by the bank-sync feed. Positive amount = outflow."""
    transaction_id: str = Field(..., min_length=1)
    account_id: str
    date: date
    amount: Decimal
    name: str
    merchant_name: Optional[str] = None
    category: Optional[str] = None
    pending: bool = False


class SyncBatch(BaseModel):
    added: List[SyncTransaction] = []
    modified: List[SyncTransaction] = []
    removed: List[str] = []


class SyncResult(BaseModel):
    added: int
    modified: int
    removed: int
