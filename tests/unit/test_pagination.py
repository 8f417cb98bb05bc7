"""CursorPaginator and PageCacheRegistry over an in-memory fetcher."""

import pytest

from app.application.dtos.common import Page
from app.application.services.pagination import (
    CachedPage,
    CursorPaginator,
    PageCache,
    PageCacheRegistry,
)
from app.domain.exceptions import ValidationException


class FakeCollection:
    """Serves ids d01..dNN by cursor like a Firestore query ordered by id."""

    def __init__(self, total: int) -> None:
        self.ids = [f"d{i:02d}" for i in range(1, total + 1)]
        self.calls: list[str | None] = []

    async def fetch(self, size: int, cursor: str | None) -> Page[str]:
        self.calls.append(cursor)
        start = self.ids.index(cursor) + 1 if cursor else 0
        items = self.ids[start : start + size]
        return Page(items, items[-1] if items else None, len(items) == size)


async def test_pages_are_walked_by_cursor_and_cached() -> None:
    coll = FakeCollection(7)
    paginator = CursorPaginator(coll.fetch, page_size=3)

    page3 = await paginator.get_page(3)
    assert page3.items == ["d07"]
    assert page3.has_more is False
    assert page3.page_number == 3
    assert coll.calls == [None, "d03", "d06"]

    page2 = await paginator.get_page(2)
    assert page2.items == ["d04", "d05", "d06"]
    assert len(coll.calls) == 3


async def test_forward_navigation_resumes_from_nearest_cached_page() -> None:
    coll = FakeCollection(10)
    paginator = CursorPaginator(coll.fetch, page_size=2)
    await paginator.get_page(2)
    coll.calls.clear()

    page4 = await paginator.get_page(4)

    assert page4.items == ["d07", "d08"]
    assert coll.calls == ["d04", "d06"]


async def test_past_the_end_is_an_empty_page() -> None:
    coll = FakeCollection(4)
    paginator = CursorPaginator(coll.fetch, page_size=2)

    page = await paginator.get_page(5)

    assert page.items == []
    assert page.has_more is False
    # a full last page means one extra, empty fetch before giving up
    assert coll.calls == [None, "d02", "d04"]


async def test_invalid_page_numbers_are_rejected() -> None:
    paginator = CursorPaginator(FakeCollection(1).fetch, page_size=1)
    with pytest.raises(ValidationException):
        await paginator.get_page(0)
    with pytest.raises(ValidationException):
        CursorPaginator(FakeCollection(1).fetch, page_size=0)


async def test_registry_shares_caches_and_invalidates_by_collection() -> None:
    registry = PageCacheRegistry(max_queries=2)
    products = registry.cache_for(("products", "c1", 10))
    assert registry.cache_for(("products", "c1", 10)) is products
    registry.cache_for(("clients", None, 10))

    registry.invalidate("products")

    assert registry.cache_for(("products", "c1", 10)) is not products
    assert len(registry) == 2


def test_registry_evicts_least_recently_used() -> None:
    registry = PageCacheRegistry(max_queries=2)
    first = registry.cache_for(("a",))
    registry.cache_for(("b",))
    registry.cache_for(("a",))
    registry.cache_for(("c",))

    assert registry.cache_for(("a",)) is first
    assert len(registry) == 2


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def test_cached_pages_expire_after_ttl() -> None:
    clock = FakeClock()
    coll = FakeCollection(6)
    registry = PageCacheRegistry(ttl_seconds=300, clock=clock)
    paginator = CursorPaginator(coll.fetch, 3, registry.cache_for(("products",)))

    await paginator.get_page(2)
    clock.now += 299
    await paginator.get_page(1)
    assert coll.calls == [None, "d03"]

    clock.now += 1
    page2 = await paginator.get_page(2)

    assert page2.items == ["d04", "d05", "d06"]
    assert coll.calls == [None, "d03", None, "d03"]


def test_cache_without_ttl_keeps_pages() -> None:
    clock = FakeClock()
    cache = PageCache(clock=clock)
    cache.put(1, CachedPage(["d01"], "d01", False))
    clock.now += 10**6

    assert cache.get(1) is not None
    assert len(cache) == 1
