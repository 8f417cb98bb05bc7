"""Screen schedule API: content spots on LED sites."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentUserDep, get_screen_schedule_service
from app.application.services import ScreenScheduleService
from app.core.limiter import limit_writes
from app.schemas.product import ScreenScheduleCreateRequest, ScreenScheduleResponse

router = APIRouter()

ScheduleServiceDep = Annotated[ScreenScheduleService, Depends(get_screen_schedule_service)]


@router.get("/by-site/{product_id}", response_model=list[ScreenScheduleResponse])
async def list_screen_schedules(
    product_id: str, _: CurrentUserDep, schedule_svc: ScheduleServiceDep
):
    schedules = await schedule_svc.list_for_product(product_id)
    return [ScreenScheduleResponse.model_validate(s) for s in schedules]


@router.post("/by-site/{product_id}", response_model=ScreenScheduleResponse, status_code=201)
@limit_writes
async def create_screen_schedule(
    request: Request,
    product_id: str,
    body: ScreenScheduleCreateRequest,
    current_user: CurrentUserDep,
    schedule_svc: ScheduleServiceDep,
):
    created = await schedule_svc.create(
        product_id,
        body.spot_number,
        body.media,
        current_user,
        title=body.title,
        duration=body.duration,
    )
    return ScreenScheduleResponse.model_validate(created)


@router.delete("/{schedule_id}", status_code=204)
@limit_writes
async def delete_screen_schedule(
    request: Request,
    schedule_id: str,
    _: CurrentUserDep,
    schedule_svc: ScheduleServiceDep,
):
    await schedule_svc.delete(schedule_id)
