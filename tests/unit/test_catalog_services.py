"""Product and client pages: cache reuse, search within a page, write invalidation."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.client import ClientCreate, ClientResult
from app.application.dtos.common import CurrentUser, Page
from app.application.dtos.product import ProductResult
from app.application.services import ClientService, PageCacheRegistry, ProductService
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)

USER = CurrentUser(uid="u1", display_name="Sam", company_id="c1")
OUTSIDER = CurrentUser(uid="u9", display_name="Pat", company_id="OTHER")


def _product(product_id: str, name: str, deleted: bool = False) -> ProductResult:
    return ProductResult(
        id=product_id,
        name=name,
        company_id="c1",
        price=50000,
        location="Quezon City",
        site_code=product_id.upper(),
        type="RENTAL",
        description="",
        status="PENDING",
        active=True,
        deleted=deleted,
        position=0,
    )


async def test_product_pages_are_cached_until_a_write() -> None:
    repo = AsyncMock()
    repo.page_by_company.return_value = Page(
        [_product("p1", "EDSA Guadalupe"), _product("p2", "C5 Libis")], "p2", True
    )
    repo.get_by_id.return_value = _product("p1", "EDSA Guadalupe")
    svc = ProductService(repo, PageCacheRegistry())

    first = await svc.list_page("c1", 1, 2)
    again = await svc.list_page("c1", 1, 2)
    assert [p.id for p in first.items] == [p.id for p in again.items] == ["p1", "p2"]
    assert repo.page_by_company.await_count == 1

    await svc.update("p1", {"name": "EDSA Guadalupe North"})
    await svc.list_page("c1", 1, 2)
    assert repo.page_by_company.await_count == 2


async def test_product_pages_are_refetched_after_ttl() -> None:
    now = [0.0]
    repo = AsyncMock()
    repo.page_by_company.return_value = Page([_product("p1", "Old")], None, False)
    svc = ProductService(repo, PageCacheRegistry(ttl_seconds=60, clock=lambda: now[0]))

    await svc.list_page("c1", 1, 10)
    # renamed by another process; no write went through this service
    repo.page_by_company.return_value = Page([_product("p1", "New")], None, False)
    assert [p.name for p in (await svc.list_page("c1", 1, 10)).items] == ["Old"]

    now[0] = 61.0
    served = await svc.list_page("c1", 1, 10)

    assert [p.name for p in served.items] == ["New"]
    assert repo.page_by_company.await_count == 2


async def test_product_search_filters_within_the_page() -> None:
    repo = AsyncMock()
    repo.page_by_company.return_value = Page(
        [_product("p1", "EDSA Guadalupe"), _product("p2", "C5 Libis")], "p2", True
    )
    svc = ProductService(repo, PageCacheRegistry())

    result = await svc.list_page("c1", 1, 2, search="  libis ")

    assert [p.id for p in result.items] == ["p2"]
    assert result.last_doc_id == "p2"
    assert result.has_more is True


async def test_deleted_product_is_not_found() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _product("p1", "Old", deleted=True)
    with pytest.raises(ResourceNotFoundException):
        await ProductService(repo, PageCacheRegistry()).get("p1")


async def test_client_gets_the_company_of_its_creator() -> None:
    repo = AsyncMock()
    svc = ClientService(repo, PageCacheRegistry())

    await svc.create(
        ClientCreate(name="Acme", email="buyer@acme.test", phone="", company="Acme Corp"), USER
    )

    data, uid, name = repo.create.await_args.args
    assert data.company_id == "c1"
    assert (uid, name) == ("u1", "Sam")


async def test_client_email_is_validated() -> None:
    repo = AsyncMock()
    with pytest.raises(ValidationException):
        await ClientService(repo, PageCacheRegistry()).create(
            ClientCreate(name="Acme", email="acme", phone="", company=""), USER
        )
    repo.create.assert_not_awaited()


async def test_products_of_another_company_are_not_written() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = _product("p1", "EDSA Guadalupe")
    svc = ProductService(repo, PageCacheRegistry())

    with pytest.raises(AuthorizationException):
        await svc.update("p1", {"name": "Hijacked"}, OUTSIDER)
    with pytest.raises(AuthorizationException):
        await svc.soft_delete("p1", OUTSIDER)

    repo.update.assert_not_awaited()
    repo.soft_delete.assert_not_awaited()


async def test_clients_of_another_company_are_not_deleted() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = ClientResult(
        id="cl1",
        name="Acme",
        email="buyer@acme.test",
        phone="",
        company="Acme Corp",
        company_id="c1",
        status="lead",
    )
    svc = ClientService(repo, PageCacheRegistry())

    with pytest.raises(AuthorizationException):
        await svc.delete("cl1", OUTSIDER)
    repo.delete.assert_not_awaited()

    await svc.delete("cl1", USER)
    repo.delete.assert_awaited_once_with("cl1")
