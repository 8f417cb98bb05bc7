"""Petty cash API: fund configuration, cycles and expenses with receipts."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile

from app.api.v1.dependencies import CompanyIdDep, CurrentUserDep, get_petty_cash_service
from app.application.services import PettyCashService
from app.application.services.petty_cash_service import UploadedFile
from app.core.config import get_settings
from app.core.limiter import limit_writes
from app.schemas.finance import (
    PettyCashConfigRequest,
    PettyCashConfigResponse,
    PettyCashCycleResponse,
    PettyCashExpenseResponse,
    PettyCashSummaryResponse,
)

router = APIRouter()

PettyCashServiceDep = Annotated[PettyCashService, Depends(get_petty_cash_service)]


@router.put("/config", response_model=PettyCashConfigResponse)
@limit_writes
async def save_petty_cash_config(
    request: Request,
    body: PettyCashConfigRequest,
    company_id: CompanyIdDep,
    petty_cash_svc: PettyCashServiceDep,
):
    saved = await petty_cash_svc.save_config(company_id, body.amount, body.warning_amount)
    return PettyCashConfigResponse.model_validate(saved)


@router.get("/config", response_model=PettyCashConfigResponse)
async def get_petty_cash_config(company_id: CompanyIdDep, petty_cash_svc: PettyCashServiceDep):
    config = await petty_cash_svc.get_config(company_id)
    if config is None:
        raise HTTPException(status_code=404, detail="Petty cash is not configured")
    return PettyCashConfigResponse.model_validate(config)


@router.post("/cycles", response_model=PettyCashCycleResponse, status_code=201)
@limit_writes
async def create_petty_cash_cycle(
    request: Request,
    company_id: CompanyIdDep,
    petty_cash_svc: PettyCashServiceDep,
):
    return PettyCashCycleResponse.model_validate(await petty_cash_svc.create_cycle(company_id))


@router.post("/expenses", response_model=PettyCashExpenseResponse, status_code=201)
@limit_writes
async def add_petty_cash_expense(
    request: Request,
    company_id: CompanyIdDep,
    current_user: CurrentUserDep,
    petty_cash_svc: PettyCashServiceDep,
    item: str = Form(..., min_length=1, max_length=500),
    amount: float = Form(..., gt=0),
    requested_by: str = Form(default="", max_length=255),
    files: list[UploadFile] = File(default=[]),
):
    """Record an expense against the latest cycle; receipts are stored and linked."""
    max_size = get_settings().max_upload_size
    uploads: list[UploadedFile] = []
    for upload in files:
        if not upload.filename:
            raise HTTPException(status_code=400, detail="Filename required")
        content = await upload.read()
        if len(content) > max_size:
            raise HTTPException(
                status_code=413, detail=f"{upload.filename} exceeds {max_size} bytes"
            )
        uploads.append(
            UploadedFile(
                filename=upload.filename,
                content=content,
                content_type=upload.content_type or "application/octet-stream",
            )
        )
    expense = await petty_cash_svc.add_expense(
        company_id,
        item,
        amount,
        requested_by or current_user.display_name,
        current_user,
        attachments=uploads,
    )
    return PettyCashExpenseResponse.model_validate(expense)


@router.post("/replenish", response_model=PettyCashCycleResponse)
@limit_writes
async def replenish_petty_cash(
    request: Request,
    company_id: CompanyIdDep,
    petty_cash_svc: PettyCashServiceDep,
):
    """Close the active cycle and open the next one."""
    return PettyCashCycleResponse.model_validate(await petty_cash_svc.replenish(company_id))


@router.get("/summary", response_model=PettyCashSummaryResponse)
async def petty_cash_summary(company_id: CompanyIdDep, petty_cash_svc: PettyCashServiceDep):
    return PettyCashSummaryResponse.model_validate(await petty_cash_svc.summary(company_id))
