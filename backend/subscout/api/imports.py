"""
Import API endpoints.
"""

from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, UploadFile, File, Form, HTTPException
from sqlalchemy.orm import Session

from subscout.database import get_db
from subscout.schemas.import_file import (
    ImportLogResponse,
    ImportMode,
    ImportStatusResponse,
    MultiImportResponse,
)
from subscout.services import import_service

router = APIRouter(prefix="/imports", tags=["imports"])


@router.post("", response_model=ImportStatusResponse)
async def upload_statement(
    file: UploadFile = File(...),
    account_id: str = Form(...),
    date_format: str = Form("%m/%d/%Y"),
    db: Session = Depends(get_db)
):
    """Upload a CSV/OFX statement and store its transactions"""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = Path(file.filename).suffix.lower()
    if ext not in import_service.ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"File type not supported. Allowed: {', '.join(import_service.ALLOWED_EXTENSIONS)}"
        )

    content = await file.read()
    file_path = import_service.save_upload(content, file.filename)

    try:
        return import_service.import_statement(
            db, file_path, file.filename, account_id, date_format
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/multi", response_model=MultiImportResponse)
async def upload_statements(
    files: List[UploadFile] = File(...),
    account_id: str = Form(...),
    mode: ImportMode = Form(ImportMode.full),
    date_format: str = Form("%m/%d/%Y"),
    db: Session = Depends(get_db)
):
    """
    Upload several statements of one account and detect subscriptions
    across all of them. subscriptions_only analyzes without storing.
    """
    if len(files) < import_service.MIN_STATEMENTS:
        raise HTTPException(
            status_code=400,
            detail=f"At least {import_service.MIN_STATEMENTS} statements are required"
        )
    if len(files) > import_service.MAX_STATEMENTS:
        raise HTTPException(
            status_code=400,
            detail=f"At most {import_service.MAX_STATEMENTS} statements per upload"
        )

    for file in files:
        if not file.filename:
            raise HTTPException(status_code=400, detail="No filename provided")
        if Path(file.filename).suffix.lower() not in import_service.ALLOWED_EXTENSIONS:
            raise HTTPException(
                status_code=400,
                detail=f"File type not supported: {file.filename}"
            )

    uploads = []
    for file in files:
        content = await file.read()
        uploads.append((import_service.save_upload(content, file.filename), file.filename))

    try:
        return import_service.import_statements(
            db, uploads, account_id, mode, date_format
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/history", response_model=list[ImportLogResponse])
def get_import_history(
    limit: int = 20,
    db: Session = Depends(get_db)
):
    """Get import history"""
    logs = import_service.get_import_history(db, limit)
    return [ImportLogResponse.model_validate(log) for log in logs]
