# waitlist/database/session.py
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from waitlist.config import Settings


def get_database_url(settings: Settings) -> Optional[str]:
    """Return the configured storage URL, or None when the binding is missing."""
    database_url = (settings.WAITLIST_DB_URL or "").strip()
    return database_url or None


@lru_cache(maxsize=None)
def get_engine(database_url: str) -> Engine:
    """Build the process-wide engine for a database URL, once."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},  # sessions run in the threadpool
            future=True,
        )

    return create_engine(
        database_url,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=300,
        future=True,
    )


@lru_cache(maxsize=None)
def get_session_factory(database_url: str) -> sessionmaker:
    return sessionmaker(bind=get_engine(database_url), autoflush=False, autocommit=False, future=True)
