"""Client API: CRUD, name-ordered pages and counts."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import CurrentUserDep, PageParamsDep, get_client_service
from app.application.dtos.client import ClientCreate
from app.application.services import ClientService
from app.core.limiter import limit_writes
from app.schemas.client import ClientCreateRequest, ClientResponse, ClientUpdate
from app.schemas.common import CountResponse, PageResponse, to_page_response

router = APIRouter()

ClientServiceDep = Annotated[ClientService, Depends(get_client_service)]


@router.post("", response_model=ClientResponse, status_code=201)
@limit_writes
async def create_client(
    request: Request,
    body: ClientCreateRequest,
    current_user: CurrentUserDep,
    client_svc: ClientServiceDep,
):
    """Create a client owned by the caller's company."""
    created = await client_svc.create(ClientCreate(**body.model_dump()), current_user)
    return ClientResponse.model_validate(created)


@router.get("", response_model=PageResponse[ClientResponse])
async def list_clients(
    current_user: CurrentUserDep,
    client_svc: ClientServiceDep,
    paging: PageParamsDep,
    status: str | None = None,
    uploaded_by: str | None = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
):
    result = await client_svc.list_page(
        paging.page,
        paging.page_size,
        company_id=current_user.company_id,
        status=status,
        uploaded_by=uploaded_by,
        search=search,
    )
    return to_page_response(result, ClientResponse)


@router.get("/count", response_model=CountResponse)
async def count_clients(
    current_user: CurrentUserDep,
    client_svc: ClientServiceDep,
    status: str | None = None,
    uploaded_by: str | None = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
):
    total = await client_svc.count(
        company_id=current_user.company_id,
        status=status,
        uploaded_by=uploaded_by,
        search=search,
    )
    return CountResponse(count=total)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: str, current_user: CurrentUserDep, client_svc: ClientServiceDep):
    return ClientResponse.model_validate(await client_svc.get(client_id, current_user))


@router.patch("/{client_id}", response_model=ClientResponse)
@limit_writes
async def update_client(
    request: Request,
    client_id: str,
    body: ClientUpdate,
    current_user: CurrentUserDep,
    client_svc: ClientServiceDep,
):
    fields = body.model_dump(exclude_unset=True)
    updated = await client_svc.update(client_id, fields, current_user)
    return ClientResponse.model_validate(updated)


@router.delete("/{client_id}", status_code=204)
@limit_writes
async def delete_client(
    request: Request,
    client_id: str,
    current_user: CurrentUserDep,
    client_svc: ClientServiceDep,
):
    await client_svc.delete(client_id, current_user)
