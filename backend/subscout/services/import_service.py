"""
Import service for statement uploads.
"""

import logging
import uuid
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from datetime import date, datetime

from sqlalchemy.orm import Session

from subscout.config import settings
from subscout.models.account import Account
from subscout.models.import_log import ImportLog, ImportStatus
from subscout.models.transaction import Transaction, TransactionSource
from subscout.parsers import get_parser, supported_extensions
from subscout.detection import DetectionThresholds, TransactionRecord, run_detection
from subscout.schemas.import_file import ImportMode, ImportStatusResponse, MultiImportResponse
from subscout.schemas.subscription import SubscriptionListResponse
from subscout.services.deduplication_service import existing_hashes, generate_transaction_hash
from subscout.services.subscription_service import get_overrides

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = supported_extensions()

# A combined analysis needs several statements to see a cadence
MIN_STATEMENTS = 3
MAX_STATEMENTS = 10


def save_upload(file_content: bytes, filename: str) -> Path:
    """Save uploaded file into the inbox and return its path"""
    inbox_path = Path(settings.import_inbox_path)
    inbox_path.mkdir(parents=True, exist_ok=True)

    file_path = inbox_path / f"{uuid.uuid4()}_{Path(filename).name}"
    with open(file_path, 'wb') as f:
        f.write(file_content)

    return file_path


def _archive(file_path: Path, destination: str) -> None:
    target = Path(destination)
    target.mkdir(parents=True, exist_ok=True)
    shutil.move(str(file_path), str(target / file_path.name))


def store_parsed_transactions(
    db: Session,
    parsed: List[Dict[str, Any]],
    account_id: str
) -> Dict[str, int]:
    """Persist parsed rows as imported-file transactions, skipping duplicates"""
    hashed = [
        (generate_transaction_hash(t['date'], t['amount'], t['raw_description'], account_id), t)
        for t in parsed
    ]
    seen = existing_hashes(db, [h for h, _ in hashed])

    imported = 0
    skipped = 0
    for txn_hash, txn_data in hashed:
        # Identical rows inside one file collapse too
        if txn_hash in seen:
            skipped += 1
            continue
        seen.add(txn_hash)

        db.add(Transaction(
            id=str(uuid.uuid4()),
            hash=txn_hash,
            source=TransactionSource.imported_file,
            date=txn_data['date'],
            amount=txn_data['amount'],
            raw_description=txn_data['raw_description'],
            merchant_name=txn_data.get('merchant_name'),
            category=txn_data.get('category'),
            account_id=account_id,
        ))
        imported += 1

    return {'imported': imported, 'skipped': skipped}


def import_statement(
    db: Session,
    file_path: Path,
    filename: str,
    account_id: str,
    date_format: str = "%m/%d/%Y",
    column_mapping: Optional[Dict[str, Any]] = None
) -> ImportStatusResponse:
    """Parse a saved statement file and store its transactions"""
    _get_account(db, account_id)
    status, _ = _run_import(db, file_path, filename, account_id, date_format, column_mapping)
    return status


def _get_account(db: Session, account_id: str) -> Account:
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise ValueError(f"Account {account_id} not found")
    return account


def _run_import(
    db: Session,
    file_path: Path,
    filename: str,
    account_id: str,
    date_format: str,
    column_mapping: Optional[Dict[str, Any]] = None
) -> Tuple[ImportStatusResponse, List[Dict[str, Any]]]:
    """Store one statement; also hands back the parsed rows"""
    parser = get_parser(file_path)
    if not parser:
        raise ValueError(f"No parser available for file type: {file_path.suffix}")

    import_log = ImportLog(
        id=str(uuid.uuid4()),
        filename=filename,
        file_format=file_path.suffix.lower().lstrip('.'),
        account_id=account_id,
        status=ImportStatus.processing
    )
    db.add(import_log)
    db.commit()

    try:
        parsed = parser.parse(file_path, column_mapping, date_format)
        counts = store_parsed_transactions(db, parsed, account_id)

        import_log.status = ImportStatus.completed
        import_log.transactions_imported = counts['imported']
        import_log.transactions_skipped = counts['skipped']
        import_log.completed_at = datetime.utcnow()
        db.commit()

        _archive(file_path, settings.import_processed_path)
        logger.info(
            f"Imported {counts['imported']} transactions from {filename} "
            f"({counts['skipped']} duplicates skipped)"
        )

        status = ImportStatusResponse(
            import_id=import_log.id,
            status=ImportStatus.completed,
            filename=filename,
            transactions_imported=counts['imported'],
            transactions_skipped=counts['skipped'],
        )
        return status, parsed

    except Exception as e:
        db.rollback()
        import_log.status = ImportStatus.failed
        import_log.error_message = str(e)
        import_log.completed_at = datetime.utcnow()
        db.commit()

        _archive(file_path, settings.import_failed_path)
        logger.error(f"Import of {filename} failed: {e}")
        raise


def parse_statement(
    file_path: Path,
    date_format: str = "%m/%d/%Y",
    column_mapping: Optional[Dict[str, Any]] = None
) -> List[Dict[str, Any]]:
    """Parse a statement without storing anything"""
    parser = get_parser(file_path)
    if not parser:
        raise ValueError(f"No parser available for file type: {file_path.suffix}")
    return parser.parse(file_path, column_mapping, date_format)


def statement_records(
    rows: List[Dict[str, Any]],
    account: Account
) -> List[TransactionRecord]:
    """
    Engine records for parsed statement rows.

    Overlapping statements repeat rows; the content hash keeps one copy of
    each so a charge is never counted twice.
    """
    records = {}
    for row in rows:
        txn_hash = generate_transaction_hash(row['date'], row['amount'], row['raw_description'], account.id)
        records.setdefault(txn_hash, TransactionRecord(
            id=txn_hash,
            amount=row['amount'],
            date=row['date'],
            raw_name=row['raw_description'],
            merchant_name=row.get('merchant_name'),
            category=row.get('category'),
            account_hint=account.name,
        ))
    return list(records.values())


def import_statements(
    db: Session,
    uploads: List[Tuple[Path, str]],
    account_id: str,
    mode: ImportMode = ImportMode.full,
    date_format: str = "%m/%d/%Y",
    as_of: Optional[date] = None
) -> MultiImportResponse:
    """
    Detect subscriptions across several saved statements of one account.

    In full mode every file is imported like a single upload first; the
    first failing file stops the batch and the files after it are moved to
    the failed folder. In subscriptions_only mode nothing is stored and the
    uploaded files are deleted once parsed.
    """
    try:
        account = _get_account(db, account_id)
    except ValueError:
        for file_path, _ in uploads:
            _discard(file_path)
        raise

    rows: List[Dict[str, Any]] = []
    statuses: List[ImportStatusResponse] = []

    if mode == ImportMode.full:
        for index, (file_path, filename) in enumerate(uploads):
            try:
                status, parsed = _run_import(db, file_path, filename, account.id, date_format)
            except Exception:
                for pending_path, _ in uploads[index + 1:]:
                    _archive(pending_path, settings.import_failed_path)
                raise
            statuses.append(status)
            rows.extend(parsed)
    else:
        try:
            for file_path, _ in uploads:
                rows.extend(parse_statement(file_path, date_format))
        finally:
            for file_path, _ in uploads:
                _discard(file_path)

    result = run_detection(
        imported=statement_records(rows, account),
        synced=(),
        overrides=get_overrides(db),
        thresholds=DetectionThresholds.from_settings(settings),
        as_of=as_of or date.today(),
    )
    logger.info(
        f"Analyzed {len(uploads)} statements ({mode.value}): "
        f"{len(rows)} rows, {result.count} subscriptions"
    )

    return MultiImportResponse(
        **SubscriptionListResponse.from_result(result).model_dump(),
        mode=mode,
        files=len(uploads),
        transactions_parsed=len(rows),
        imports=statuses,
    )


def _discard(file_path: Path) -> None:
    file_path.unlink(missing_ok=True)


def get_import_history(db: Session, limit: int = 20) -> List[ImportLog]:
    """Get recent import history"""
    return db.query(ImportLog).order_by(ImportLog.created_at.desc()).limit(limit).all()
