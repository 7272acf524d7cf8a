"""
Bank-sync ingestion endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from subscout.database import get_db
from subscout.schemas.sync import SyncBatch, SyncResult
from subscout.services import sync_service

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("/transactions", response_model=SyncResult)
def sync_transactions(
    batch: SyncBatch,
    db: Session = Depends(get_db)
):
    """Apply one page of added/modified/removed transactions from the sync feed"""
    try:
        return sync_service.apply_sync_batch(db, batch)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
