"""
Account database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
import enum
from subscout.database import Base


class AccountType(str, enum.Enum):
    """Account type enumeration."""
    checking = "checking"
    savings = "savings"
    credit = "credit"
    other = "other"


class Account(Base):
    """Account model. Transactions from both sources hang off an account."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    mask = Column(String(4), nullable=True)  # Last 4 digits
    account_type = Column(Enum(AccountType), nullable=False, default=AccountType.checking)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")
    import_logs = relationship("ImportLog", back_populates="account")

    @property
    def display_hint(self) -> str:
        """Name plus masked digits, used to label charges."""
        if self.mask:
            return f"{self.name} ••{self.mask}"
        return self.name
