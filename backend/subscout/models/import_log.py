"""
Import log database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Enum, Text, ForeignKey
from sqlalchemy.orm import relationship
import enum
from subscout.database import Base


class ImportStatus(str, enum.Enum):
    """Import status enumeration."""
    processing = "processing"
    completed = "completed"
    failed = "failed"


class ImportLog(Base):
    """One statement upload and its outcome."""

    __tablename__ = "import_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    filename = Column(String(255), nullable=False)
    file_format = Column(String(10), nullable=True)  # csv, ofx, qfx
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    status = Column(Enum(ImportStatus), nullable=False, default=ImportStatus.processing)
    transactions_imported = Column(Integer, default=0, nullable=False)
    transactions_skipped = Column(Integer, default=0, nullable=False)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    account = relationship("Account", back_populates="import_logs")
