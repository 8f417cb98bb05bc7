"""Logistics report API: reports filed against service assignments."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import CurrentUserDep, get_report_service
from app.application.dtos.report import ReportCreate
from app.application.services import ReportService
from app.core.limiter import limit_writes
from app.schemas.report import ReportCreateRequest, ReportResponse, ReportUpdate

router = APIRouter()

ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]


@router.post("", response_model=ReportResponse, status_code=201)
@limit_writes
async def create_report(
    request: Request,
    body: ReportCreateRequest,
    current_user: CurrentUserDep,
    report_svc: ReportServiceDep,
    assignment_id: Annotated[str | None, Query(description="Service assignment reported on")] = None,
):
    """File a report for the assignment's site; site and job order details are copied in."""
    data = ReportCreate(
        **body.model_dump(exclude={"attachments"}),
        attachments=body.attachment_dicts(),
    )
    created = await report_svc.create(assignment_id, data, current_user)
    return ReportResponse.model_validate(created)


@router.get("/by-site/{site_id}", response_model=list[ReportResponse])
async def list_site_reports(site_id: str, _: CurrentUserDep, report_svc: ReportServiceDep):
    return [ReportResponse.model_validate(r) for r in await report_svc.list_by_site(site_id)]


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(report_id: str, current_user: CurrentUserDep, report_svc: ReportServiceDep):
    return ReportResponse.model_validate(await report_svc.get(report_id, current_user))


@router.patch("/{report_id}", response_model=ReportResponse)
@limit_writes
async def update_report(
    request: Request,
    report_id: str,
    body: ReportUpdate,
    current_user: CurrentUserDep,
    report_svc: ReportServiceDep,
):
    updated = await report_svc.update(report_id, body.to_fields(), current_user)
    return ReportResponse.model_validate(updated)
