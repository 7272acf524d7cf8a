"""
Statement import schemas.
"""

import enum
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from subscout.models.import_log import ImportStatus
from subscout.schemas.subscription import SubscriptionListResponse


class ImportCounts(BaseModel):
    transactions_imported: int = 0
    transactions_skipped: int = 0


class ImportStatusResponse(ImportCounts):
    """Outcome of a single upload."""
    import_id: str
    status: ImportStatus
    filename: str


class ImportLogResponse(ImportCounts):
    id: str
    filename: str
    file_format: Optional[str] = None
    account_id: str
    status: ImportStatus
    error_message: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ImportMode(str, enum.Enum):
    full = "full"
    subscriptions_only = "subscriptions_only"


class MultiImportResponse(SubscriptionListResponse):
    """Subscriptions found across several statements of one account."""
    mode: ImportMode
    files: int
    transactions_parsed: int
    imports: List[ImportStatusResponse] = []
