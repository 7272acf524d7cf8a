"""
Account Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional
from subscout.models.account import AccountType
from subscout.models.transaction import TransactionSource


class AccountBase(BaseModel):
    """Base account schema."""
    name: str = Field(..., min_length=1, max_length=100)
    mask: Optional[str] = Field(None, pattern=r"^\d{2,4}$")
    account_type: AccountType = AccountType.checking


class AccountCreate(AccountBase):
    """Schema for creating an account."""
    pass


class AccountUpdate(BaseModel):
    """Schema for updating an account."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    mask: Optional[str] = Field(None, pattern=r"^\d{2,4}$")
    account_type: Optional[AccountType] = None
    is_active: Optional[bool] = None


class AccountResponse(AccountBase):
    """Schema for account response."""
    id: str
    display_hint: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class AccountList(BaseModel):
    """Schema for listing accounts."""
    items: list[AccountResponse]
    total: int


class SourceActivity(BaseModel):
    """How much one source has delivered for an account."""
    source: TransactionSource
    transaction_count: int
    first_date: Optional[date] = None
    last_date: Optional[date] = None


class AccountSources(BaseModel):
    account_id: str
    sources: list[SourceActivity]
