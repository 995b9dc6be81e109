"""
FastAPI dependencies for dependency injection.

This module provides the relational store, the cache and the URLService
built from them.

Pattern: Dependency Injection
- Tests override get_store / get_cache with in-memory fakes
- A missing store configuration surfaces here as StoreNotConfigured (500),
  before any handler runs
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from shortener_app.cache.factory import CacheFactory
from shortener_app.cache.strategies import CacheStrategy
from shortener_app.database.connection import get_db
from shortener_app.exceptions import InvalidInput
from shortener_app.services.url_service import URLService
from shortener_app.storage.strategies import URLStoreStrategy, SQLAlchemyURLStore


def get_store(db: Session = Depends(get_db)) -> URLStoreStrategy:
    """
    Get a relational store bound to the request's session.

    get_db raises StoreNotConfigured when settings.database_url is empty.
    """
    return SQLAlchemyURLStore(db)


def get_cache() -> CacheStrategy:
    """
    Get cache instance (singleton).

    Raises:
        StoreNotConfigured: If settings.cache_backend is empty
    """
    return CacheFactory.from_settings()


def get_url_service(
    store: URLStoreStrategy = Depends(get_store),
    cache: CacheStrategy = Depends(get_cache)
) -> URLService:
    """
    Get URLService with all dependencies injected.

    Controllers depend on the service, the service depends on
    infrastructure (store, cache).
    """
    return URLService(store=store, cache=cache)


def get_code(code: str) -> str:
    """
    Path parameter `code`, rejected when blank.

    Raises:
        InvalidInput: If the code is empty
    """
    if not code.strip():
        raise InvalidInput("Missing code")
    return code
