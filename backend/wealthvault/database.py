# backend/wealthvault/database.py
"""
Engine and session factory for the record store.

SQLite (the default for development and tests) runs on a single shared
connection so an in-memory database survives across FastAPI's worker
threads. Any other URL gets SQLAlchemy's pooled engine with pre-ping.
"""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings
from .models import Base

logger = logging.getLogger(__name__)


def _create_engine() -> Engine:
    options: dict = {"echo": settings.debug}
    if settings.is_sqlite:
        options.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    else:
        options.update(pool_pre_ping=True)

    engine = create_engine(settings.database_url, **options)
    logger.info(f"Record store engine created (dialect={engine.dialect.name})")
    return engine


engine = _create_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create missing tables. Existing tables are left untouched."""
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
