"""
Database engine and session management.

The engine is created lazily from settings.database_url so a deployment
without a database answers "Database not configured" instead of failing
at import time.
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from shortener_app.config import settings
from shortener_app.exceptions import StoreNotConfigured

Base = declarative_base()


@lru_cache()
def get_engine():
    """Create the SQLAlchemy engine once (singleton)."""
    if not settings.database_url:
        raise StoreNotConfigured("Database not configured")

    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # SQLite objects are created in one thread and used in the threadpool
        connect_args["check_same_thread"] = False

    return create_engine(settings.database_url, connect_args=connect_args)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db():
    """FastAPI dependency yielding one session per request."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables and indexes if they don't exist."""
    # Import models to ensure they're registered with Base
    from shortener_app.models import URL  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
