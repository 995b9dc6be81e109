"""
URL storage strategies using Strategy Pattern.

The relational store is the source of truth for every URL record.
The service layer only talks to URLStoreStrategy, so it can run against:
- SQLAlchemy: any database SQLAlchemy supports (SQLite, PostgreSQL, ...)
- In-memory: a dict-backed fake for tests

Every implementation enforces the same contract:
- code is unique; inserting a taken code raises Conflict
- mutations return the number of affected rows (0 means "no such code")
- backend failures are raised as StoreUnavailable
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, List, Optional
import logging
import threading

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortener_app.exceptions import Conflict, StoreUnavailable
from shortener_app.models.url import URL
from shortener_app.schemas.url import URLRecord

logger = logging.getLogger(__name__)


class URLStoreStrategy(ABC):
    """
    Abstract base class for relational URL stores.

    Methods are sync: the service calls them between its async cache calls,
    the same way it would call a SQLAlchemy session.
    """

    @abstractmethod
    def get(self, code: str) -> Optional[URLRecord]:
        """
        Get a record by primary key.

        Args:
            code: Short code

        Returns:
            The record or None if not found
        """
        pass

    @abstractmethod
    def insert(
        self,
        code: str,
        original_url: str,
        created_at: datetime,
        expires_at: Optional[datetime] = None
    ) -> URLRecord:
        """
        Insert a new record with clicks = 0.

        Raises:
            Conflict: If the code already exists
        """
        pass

    @abstractmethod
    def update_url(self, code: str, original_url: str) -> int:
        """Set original_url. Returns affected row count."""
        pass

    @abstractmethod
    def delete(self, code: str) -> int:
        """Delete a record. Returns affected row count."""
        pass

    @abstractmethod
    def increment_clicks(self, code: str) -> int:
        """Add one click. Returns affected row count."""
        pass

    @abstractmethod
    def list_recent(self, limit: int = 100) -> List[URLRecord]:
        """Records ordered by created_at, newest first."""
        pass


class SQLAlchemyURLStore(URLStoreStrategy):
    """
    SQLAlchemy implementation backed by the `urls` table.

    One instance per request (wraps the request's Session).
    Uniqueness of code is left to the database constraint, which is the
    only thing that settles two concurrent inserts of the same code.
    """

    def __init__(self, db: Session):
        """
        Initialize store.

        Args:
            db: Database session
        """
        self.db = db

    @contextmanager
    def _errors(self, operation: str):
        """Roll back and translate SQLAlchemy errors."""
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Integrity error during %s: %s", operation, e.orig)
            raise Conflict("Short code already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Database error during %s: %s", operation, e)
            raise StoreUnavailable(f"Database error during {operation}") from e

    def get(self, code: str) -> Optional[URLRecord]:
        with self._errors("get"):
            url = self.db.scalars(select(URL).where(URL.code == code)).first()
        return URLRecord.model_validate(url) if url else None

    def insert(
        self,
        code: str,
        original_url: str,
        created_at: datetime,
        expires_at: Optional[datetime] = None
    ) -> URLRecord:
        url = URL(
            code=code,
            original_url=original_url,
            clicks=0,
            created_at=created_at,
            expires_at=expires_at,
        )
        with self._errors("insert"):
            self.db.add(url)
            self.db.commit()
            self.db.refresh(url)
        return URLRecord.model_validate(url)

    def update_url(self, code: str, original_url: str) -> int:
        with self._errors("update"):
            result = self.db.execute(
                update(URL).where(URL.code == code).values(original_url=original_url)
            )
            self.db.commit()
        return result.rowcount

    def delete(self, code: str) -> int:
        with self._errors("delete"):
            result = self.db.execute(delete(URL).where(URL.code == code))
            self.db.commit()
        return result.rowcount

    def increment_clicks(self, code: str) -> int:
        # Atomic in the database: clicks = clicks + 1
        with self._errors("increment_clicks"):
            result = self.db.execute(
                update(URL).where(URL.code == code).values(clicks=URL.clicks + 1)
            )
            self.db.commit()
        return result.rowcount

    def list_recent(self, limit: int = 100) -> List[URLRecord]:
        with self._errors("list"):
            urls = self.db.scalars(
                select(URL).order_by(URL.created_at.desc()).limit(limit)
            ).all()
        return [URLRecord.model_validate(url) for url in urls]


class InMemoryURLStore(URLStoreStrategy):
    """
    In-memory store using a Python dict.

    Used in tests as a fake for the relational store.
    A lock stands in for the database's per-row atomicity.
    """

    def __init__(self):
        self._records: Dict[str, URLRecord] = {}
        self._lock = threading.Lock()

    def get(self, code: str) -> Optional[URLRecord]:
        record = self._records.get(code)
        return record.model_copy() if record is not None else None

    def insert(
        self,
        code: str,
        original_url: str,
        created_at: datetime,
        expires_at: Optional[datetime] = None
    ) -> URLRecord:
        with self._lock:
            if code in self._records:
                raise Conflict("Short code already exists")
            record = URLRecord(
                code=code,
                original_url=original_url,
                clicks=0,
                created_at=created_at,
                expires_at=expires_at,
            )
            self._records[code] = record
        return record.model_copy()

    def update_url(self, code: str, original_url: str) -> int:
        with self._lock:
            record = self._records.get(code)
            if record is None:
                return 0
            self._records[code] = record.model_copy(update={"original_url": original_url})
        return 1

    def delete(self, code: str) -> int:
        with self._lock:
            return 0 if self._records.pop(code, None) is None else 1

    def increment_clicks(self, code: str) -> int:
        with self._lock:
            record = self._records.get(code)
            if record is None:
                return 0
            self._records[code] = record.model_copy(update={"clicks": record.clicks + 1})
        return 1

    def list_recent(self, limit: int = 100) -> List[URLRecord]:
        records = sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)
        return [record.model_copy() for record in records[:limit]]
