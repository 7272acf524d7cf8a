"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date, timedelta
from decimal import Decimal
import uuid

from subscout.database import Base
from subscout.database import get_db
from subscout.main import app
from subscout.detection.records import TransactionRecord
from subscout.models.account import Account, AccountType
from subscout.models.transaction import Transaction, TransactionSource
from subscout.services.deduplication_service import generate_transaction_hash


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_account(db_session):
    """Create a sample account."""
    account = Account(
        id=str(uuid.uuid4()),
        name="Everyday Checking",
        mask="4821",
        account_type=AccountType.checking,
        is_active=True
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def make_record():
    """Factory for engine transaction records."""
    counter = {"n": 0}

    def _make(name, amount, txn_date, merchant_name=None, category=None, account_hint=None):
        counter["n"] += 1
        return TransactionRecord(
            id=f"txn-{counter['n']}",
            amount=Decimal(str(amount)),
            date=txn_date,
            raw_name=name,
            merchant_name=merchant_name,
            category=category,
            account_hint=account_hint,
        )

    return _make


@pytest.fixture
def make_series(make_record):
    """Factory for a run of charges from one merchant, one per offset (days from start)."""
    def _series(name, amounts, start, offsets, **kwargs):
        if not isinstance(amounts, (list, tuple)):
            amounts = [amounts] * len(offsets)
        return [
            make_record(name, amount, start + timedelta(days=offset), **kwargs)
            for amount, offset in zip(amounts, offsets)
        ]

    return _series


@pytest.fixture
def store_transaction(db_session, sample_account):
    """Factory that persists a transaction for the sample account."""
    def _store(name, amount, txn_date, source=TransactionSource.sync_feed, **fields):
        amount = Decimal(str(amount))
        txn = Transaction(
            id=str(uuid.uuid4()),
            hash=generate_transaction_hash(txn_date, amount, f"{source.value}:{name}", sample_account.id),
            source=source,
            date=txn_date,
            amount=amount,
            raw_description=name,
            account_id=sample_account.id,
            **fields
        )
        db_session.add(txn)
        db_session.commit()
        return txn

    return _store
