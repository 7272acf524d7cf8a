"""
Transaction schemas.
"""

from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from subscout.models.transaction import TransactionSource


class TransactionUpdate(BaseModel):
    merchant_name: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    is_excluded: Optional[bool] = None


class TransactionResponse(BaseModel):
    id: str
    hash: str
    external_id: Optional[str]
    source: TransactionSource
    date: date
    amount: Decimal
    raw_description: str
    merchant_name: Optional[str]
    category: Optional[str]
    account_id: str
    pending: bool
    is_excluded: bool
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    page: int
    pages: int
