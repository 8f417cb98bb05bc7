"""Cursor pagination over Firestore with a per-query page cache.

Firestore pages by cursor, not by offset: page N can only be fetched by
starting after the last document of page N-1. ``CursorPaginator`` keeps the
pages it has already fetched (items plus the last document ID) so that
moving back is free and moving forward resumes from the nearest known page.

Other processes (more workers, the web app) write to the same collections,
so a query's pages expire together ``ttl_seconds`` after the first of them
was fetched.
"""

import logging
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass

from app.application.dtos.common import Page
from app.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)

PageFetcher = Callable[[int, str | None], Awaitable[Page]]
"""fetch(page_size, start_after_id) -> Page"""

Clock = Callable[[], float]


@dataclass(frozen=True)
class CachedPage[T]:
    """A fetched page: its items and the cursor for the page after it."""

    items: list[T]
    last_doc_id: str | None
    has_more: bool


class PageCache[T]:
    """page_number -> CachedPage for one query.

    With ``ttl_seconds`` set, all pages are dropped once that long has passed
    since the first page was stored; None keeps pages until cleared.
    """

    def __init__(self, ttl_seconds: float | None = None, clock: Clock = time.monotonic) -> None:
        self._pages: dict[int, CachedPage[T]] = {}
        self._ttl = ttl_seconds
        self._clock = clock
        self._filled_at: float | None = None

    def __len__(self) -> int:
        self._expire()
        return len(self._pages)

    def _expire(self) -> None:
        if self._ttl is None or self._filled_at is None:
            return
        if self._clock() - self._filled_at >= self._ttl:
            logger.debug("Page cache expired after %ss", self._ttl)
            self.clear()

    def get(self, page_number: int) -> CachedPage[T] | None:
        self._expire()
        return self._pages.get(page_number)

    def put(self, page_number: int, page: CachedPage[T]) -> None:
        if not self._pages:
            self._filled_at = self._clock()
        self._pages[page_number] = page

    def nearest_before(self, page_number: int) -> tuple[int, CachedPage[T]] | None:
        """Return the highest cached page below page_number, if any."""
        self._expire()
        earlier = [n for n in self._pages if n < page_number]
        if not earlier:
            return None
        n = max(earlier)
        return n, self._pages[n]

    def clear(self) -> None:
        self._pages.clear()
        self._filled_at = None


class CursorPaginator[T]:
    """Serve numbered pages of a cursor query, caching each fetched page."""

    def __init__(
        self,
        fetch: PageFetcher,
        page_size: int,
        cache: PageCache[T] | None = None,
    ) -> None:
        if page_size < 1:
            raise ValidationException("page_size must be at least 1", field="page_size")
        self._fetch = fetch
        self._page_size = page_size
        self._cache: PageCache[T] = cache if cache is not None else PageCache()

    @property
    def cache(self) -> PageCache[T]:
        return self._cache

    async def get_page(self, page_number: int) -> Page[T]:
        """Return page ``page_number`` (1-based); past the end gives an empty page."""
        if page_number < 1:
            raise ValidationException("page must be at least 1", field="page")

        cached = self._cache.get(page_number)
        if cached is not None:
            return Page(cached.items, cached.last_doc_id, cached.has_more, page_number)

        current, cursor = 1, None
        prior = self._cache.nearest_before(page_number)
        if prior is not None:
            known, page = prior
            if not page.has_more or page.last_doc_id is None:
                return Page.empty(page_number)
            current, cursor = known + 1, page.last_doc_id

        while True:
            fetched = await self._fetch(self._page_size, cursor)
            self._cache.put(
                current,
                CachedPage(fetched.items, fetched.last_doc_id, fetched.has_more),
            )
            if current == page_number:
                return Page(fetched.items, fetched.last_doc_id, fetched.has_more, page_number)
            if not fetched.has_more or fetched.last_doc_id is None:
                return Page.empty(page_number)
            current, cursor = current + 1, fetched.last_doc_id

    def invalidate(self) -> None:
        self._cache.clear()


class PageCacheRegistry:
    """Bounded LRU of page caches keyed by (collection, *filters, page_size).

    Writes to a collection drop every cache whose key starts with that
    collection name. New caches get ``ttl_seconds`` so writes made elsewhere
    show up after at most that long.
    """

    def __init__(
        self,
        max_queries: int = 256,
        ttl_seconds: float | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self._max_queries = max_queries
        self._ttl = ttl_seconds
        self._clock = clock
        self._caches: OrderedDict[tuple[Hashable, ...], PageCache] = OrderedDict()

    def __len__(self) -> int:
        return len(self._caches)

    def cache_for(self, key: tuple[Hashable, ...]) -> PageCache:
        cache = self._caches.get(key)
        if cache is not None:
            self._caches.move_to_end(key)
            return cache
        cache = PageCache(self._ttl, self._clock)
        self._caches[key] = cache
        while len(self._caches) > self._max_queries:
            self._caches.popitem(last=False)
        return cache

    def invalidate(self, collection: str) -> None:
        stale = [key for key in self._caches if key and key[0] == collection]
        for key in stale:
            del self._caches[key]
        if stale:
            logger.debug("Dropped %d page caches for %s", len(stale), collection)

    def clear(self) -> None:
        self._caches.clear()
