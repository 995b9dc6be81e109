from datetime import datetime, timedelta, timezone
from typing import List, Optional
import logging

from shortener_app.cache.strategies import CacheStrategy
from shortener_app.config import settings
from shortener_app.exceptions import InvalidInput, NotFound, Conflict, StoreUnavailable
from shortener_app.schemas.url import MAX_EXPIRES_IN, URLRecord, URLStats, ShortenResponse
from shortener_app.services.short_code_strategies import ShortCodeStrategy, RandomShortCodeStrategy
from shortener_app.services.validation import is_valid_code, is_valid_code_length, is_valid_url
from shortener_app.storage.strategies import URLStoreStrategy

logger = logging.getLogger(__name__)


class URLService:
    """
    URL Service implementing the Cache-Aside pattern.

    - The relational store is authoritative for every field.
    - The cache holds code -> original_url and is only written with a value
      that came from a successful store read or write in the same call.
    - Cache failures never fail a request (backends report them as a miss).

    Store and cache are injected, so tests run against in-memory fakes.
    """

    def __init__(
        self,
        store: URLStoreStrategy,
        cache: CacheStrategy,
        short_code_strategy: Optional[ShortCodeStrategy] = None,
        default_ttl: Optional[int] = None
    ):
        """
        Initialize URL service with dependencies.

        Args:
            store: Relational store (source of truth)
            cache: Cache strategy (performance accelerator)
            short_code_strategy: Generator for codes when none is supplied
            default_ttl: Cache TTL in seconds when the caller gives none
        """
        self.store = store
        self.cache = cache
        self.short_code_strategy = short_code_strategy or RandomShortCodeStrategy()
        self.default_ttl = default_ttl or settings.cache_ttl

    async def create_short_url(
        self,
        original_url: str,
        code: Optional[str] = None,
        expires_in: Optional[int] = None
    ) -> URLRecord:
        """Create a new short URL.

        Everything is validated before the store is touched. A custom code
        that is taken, or a generated one that collides, raises Conflict;
        the store raises Conflict too when a concurrent insert wins the race.

        The cache entry gets expires_in as its TTL when given, so it never
        outlives the link's advertised expiration.
        """
        if not is_valid_url(original_url):
            raise InvalidInput("Invalid URL format. Must start with http:// or https://")

        if code is not None:
            if not is_valid_code_length(code):
                raise InvalidInput("Custom code must be between 3 and 32 characters")
            if not is_valid_code(code):
                raise InvalidInput(
                    "Custom code can only contain alphanumeric characters, hyphens, and underscores"
                )

        if expires_in is not None and not 0 < expires_in <= MAX_EXPIRES_IN:
            raise InvalidInput(f"expires_in must be between 1 and {MAX_EXPIRES_IN} seconds")

        if code is None:
            code = self.short_code_strategy.generate()

        if self.store.get(code) is not None:
            raise Conflict("Short code already exists")

        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(seconds=expires_in) if expires_in else None
        record = self.store.insert(code, original_url, created_at=now, expires_at=expires_at)
        logger.info("Created short URL %s -> %s", record.code, record.original_url)

        await self.cache.set(record.code, record.original_url, ttl=expires_in or self.default_ttl)
        return record

    async def get_original_url(self, code: str) -> str:
        """
        Resolve a code to its destination (Cache-Aside read).

        Flow:
        1. Check cache first; a hit returns without touching the store
        2. On a miss, read the store
        3. Populate cache with the default TTL
        4. Return original_url

        expires_at is not consulted: expired links still resolve.
        """
        cached_url = await self.cache.get(code)
        if cached_url:
            return cached_url

        record = self.store.get(code)
        if record is None:
            raise NotFound("Short URL not found")

        await self.cache.set(code, record.original_url, ttl=self.default_ttl)
        return record.original_url

    async def update_url(self, code: str, new_url: str) -> ShortenResponse:
        """Point an existing code at a new URL.

        The cache entry is deleted and then rewritten. A reader racing
        between the two calls may still put the old value back; that
        window is accepted.
        """
        if not is_valid_url(new_url):
            raise InvalidInput("Invalid URL format")

        if self.store.update_url(code, new_url) == 0:
            raise NotFound("URL not found")
        logger.info("Updated short URL %s -> %s", code, new_url)

        await self.cache.delete(code)
        await self.cache.set(code, new_url, ttl=self.default_ttl)
        return ShortenResponse(code=code, original_url=new_url)

    async def delete_url(self, code: str) -> None:
        """Delete a short URL (hard delete) and invalidate its cache entry."""
        if self.store.delete(code) == 0:
            raise NotFound("URL not found")
        logger.info("Deleted short URL %s", code)

        await self.cache.delete(code)

    async def record_click(self, code: str) -> None:
        """
        Count one click. Best-effort: a failed increment is logged and lost,
        it never fails the redirect.
        """
        try:
            self.store.increment_clicks(code)
        except StoreUnavailable as e:
            logger.warning("Could not record click for %s: %s", code, e)

    async def get_url(self, code: str) -> URLRecord:
        record = self.store.get(code)
        if record is None:
            raise NotFound("URL not found")
        return record

    async def list_urls(self, limit: Optional[int] = None) -> List[URLRecord]:
        """Newest first, never more than settings.list_limit."""
        limit = min(limit or settings.list_limit, settings.list_limit)
        return self.store.list_recent(limit)

    async def get_url_stats(self, code: str) -> URLStats:
        record = self.store.get(code)
        if record is None:
            raise NotFound("URL not found")
        return URLStats(code=record.code, clicks=record.clicks, created_at=record.created_at)
