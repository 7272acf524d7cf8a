"""
Transaction database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Date, Numeric, Text, Enum, ForeignKey, Index
from sqlalchemy.orm import relationship
import enum
from subscout.database import Base


class TransactionSource(str, enum.Enum):
    """Where a transaction entered the system."""
    imported_file = "imported_file"
    sync_feed = "sync_feed"


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    hash = Column(String(64), unique=True, nullable=False, index=True)  # For deduplication
    external_id = Column(String(100), unique=True, nullable=True)  # Sync feed transaction id
    source = Column(Enum(TransactionSource), nullable=False)
    date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)  # Positive = outflow, negative = inflow
    raw_description = Column(Text, nullable=False)
    merchant_name = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    pending = Column(Boolean, default=False, nullable=False)
    is_excluded = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")

    # Indexes for common queries
    __table_args__ = (
        Index("idx_transaction_date_account", "date", "account_id"),
        Index("idx_transaction_source_date", "source", "date"),
    )
