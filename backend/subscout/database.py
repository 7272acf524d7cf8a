"""
Database engine and session setup.
"""

import logging
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from subscout.config import settings

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db() -> None:
    """Create tables for every registered model."""
    url = make_url(settings.database_url)
    if url.drivername.startswith("sqlite") and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    # Import models so they register on Base.metadata
    import subscout.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database ready at {url.render_as_string(hide_password=True)}")


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session, closed once the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
