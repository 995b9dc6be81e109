"""
Test configuration and fixtures for FastAPI URL shortener.
This centralizes all test setup, making individual tests clean.
"""

import os

# Must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("CACHE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from main import app
from shortener_app.cache.factory import CacheFactory
from shortener_app.cache.strategies import InMemoryCache
from shortener_app.database.connection import Base, get_db
from shortener_app.dependencies import get_cache
from shortener_app.models import URL  # noqa: F401
from shortener_app.services.url_service import URLService
from shortener_app.storage.strategies import InMemoryURLStore, SQLAlchemyURLStore

# Test database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeClock:
    """Manually advanced time source for TTL tests"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        # Cleanup
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Fresh in-memory cache per test"""
    return InMemoryCache(clock=clock)


@pytest.fixture
def sql_store(db_session):
    return SQLAlchemyURLStore(db_session)


@pytest.fixture
def memory_store():
    return InMemoryURLStore()


@pytest.fixture
def service(memory_store, cache):
    """URLService wired to in-memory fakes"""
    return URLService(store=memory_store, cache=cache)


@pytest.fixture(scope="function")
def client(db_session, cache):
    """
    Create a test client with database and cache dependencies overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    # Override the database and cache dependencies
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache

    # Create test client
    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
    CacheFactory.clear_instance()
