"""Product (billboard site) API: thin routes delegating to ProductService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    CompanyIdDep,
    CurrentUserDep,
    PageParamsDep,
    get_product_service,
)
from app.application.dtos.product import ProductCreate
from app.application.services import ProductService
from app.core.limiter import limit_writes
from app.schemas.common import CountResponse, PageResponse, to_page_response
from app.schemas.product import ProductCreateRequest, ProductResponse, ProductUpdate

router = APIRouter()


@router.post("", response_model=ProductResponse, status_code=201)
@limit_writes
async def create_product(
    request: Request,
    body: ProductCreateRequest,
    company_id: CompanyIdDep,
    product_svc: Annotated[ProductService, Depends(get_product_service)],
):
    """Create a site in the caller's company (status PENDING, active)."""
    created = await product_svc.create(
        ProductCreate(company_id=company_id, **body.model_dump())
    )
    return ProductResponse.model_validate(created)


@router.get("", response_model=PageResponse[ProductResponse])
async def list_products(
    company_id: CompanyIdDep,
    product_svc: Annotated[ProductService, Depends(get_product_service)],
    paging: PageParamsDep,
    active: bool | None = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
):
    """List the company's sites by name; search filters within the page."""
    result = await product_svc.list_page(
        company_id, paging.page, paging.page_size, active, search
    )
    return to_page_response(result, ProductResponse)


@router.get("/count", response_model=CountResponse)
async def count_products(
    company_id: CompanyIdDep,
    product_svc: Annotated[ProductService, Depends(get_product_service)],
    active: bool | None = None,
):
    return CountResponse(count=await product_svc.count(company_id, active))


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    _: CurrentUserDep,
    product_svc: Annotated[ProductService, Depends(get_product_service)],
):
    return ProductResponse.model_validate(await product_svc.get(product_id))


@router.patch("/{product_id}", response_model=ProductResponse)
@limit_writes
async def update_product(
    request: Request,
    product_id: str,
    body: ProductUpdate,
    current_user: CurrentUserDep,
    product_svc: Annotated[ProductService, Depends(get_product_service)],
):
    updated = await product_svc.update(
        product_id, body.model_dump(exclude_unset=True), current_user
    )
    return ProductResponse.model_validate(updated)


@router.delete("/{product_id}", status_code=204)
@limit_writes
async def delete_product(
    request: Request,
    product_id: str,
    current_user: CurrentUserDep,
    product_svc: Annotated[ProductService, Depends(get_product_service)],
):
    """Soft delete: the site is hidden from lists but kept."""
    await product_svc.soft_delete(product_id, current_user)
