"""Collectible API: receivables created when quotations are signed."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CompanyIdDep,
    CurrentUserDep,
    PageParamsDep,
    get_collectible_service,
)
from app.application.services import CollectibleService
from app.core.limiter import limit_writes
from app.schemas.booking import CollectibleResponse, CollectibleUpdate
from app.schemas.common import PageResponse, to_page_response

router = APIRouter()

CollectibleServiceDep = Annotated[CollectibleService, Depends(get_collectible_service)]


@router.get("", response_model=PageResponse[CollectibleResponse])
async def list_collectibles(
    company_id: CompanyIdDep,
    collectible_svc: CollectibleServiceDep,
    paging: PageParamsDep,
):
    result = await collectible_svc.list_by_company(company_id, paging.page, paging.page_size)
    return to_page_response(result, CollectibleResponse)


@router.get("/{collectible_id}", response_model=CollectibleResponse)
async def get_collectible(
    collectible_id: str, current_user: CurrentUserDep, collectible_svc: CollectibleServiceDep
):
    collectible = await collectible_svc.get(collectible_id, current_user)
    return CollectibleResponse.model_validate(collectible)


@router.patch("/{collectible_id}", response_model=CollectibleResponse)
@limit_writes
async def update_collectible(
    request: Request,
    collectible_id: str,
    body: CollectibleUpdate,
    current_user: CurrentUserDep,
    collectible_svc: CollectibleServiceDep,
):
    """Record payment details or move the collectible to another status."""
    updated = await collectible_svc.update(
        collectible_id, body.model_dump(exclude_unset=True), current_user
    )
    return CollectibleResponse.model_validate(updated)


@router.delete("/{collectible_id}", status_code=204)
@limit_writes
async def delete_collectible(
    request: Request,
    collectible_id: str,
    current_user: CurrentUserDep,
    collectible_svc: CollectibleServiceDep,
):
    await collectible_svc.soft_delete(collectible_id, current_user)
