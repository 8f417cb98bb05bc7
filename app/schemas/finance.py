"""Finance request and petty cash API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FinanceRequestCreateRequest(BaseModel):
    """Request body for a reimbursement or requisition."""

    request_type: Literal["reimbursement", "requisition"]
    requestor: str = Field(..., min_length=1, max_length=255)
    requested_item: str = Field(..., min_length=1, max_length=500)
    amount: float = Field(..., gt=0)
    approved_by: str = Field(default="", max_length=255)
    actions: str = Field(default="Pending", max_length=64)
    request_no: int | None = Field(default=None, ge=1)
    attachments: str = ""
    date_released: datetime | None = None
    cashback: int = Field(default=0, ge=0)
    or_no: str = Field(default="", max_length=64)
    invoice_no: str = Field(default="", max_length=64)
    quotation: str = Field(default="", max_length=255)
    date_requested: datetime | None = None


class FinanceRequestActionUpdate(BaseModel):
    action: str = Field(..., min_length=1, max_length=64)


class FinanceRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_id: str
    request_type: str
    request_no: int
    requestor: str
    requested_item: str
    amount: float
    approved_by: str
    attachments: str
    actions: str
    date_released: datetime | None = None
    cashback: int | None = None
    or_no: str | None = None
    invoice_no: str | None = None
    quotation: str | None = None
    date_requested: datetime | None = None
    created: datetime | None = None


class PettyCashConfigRequest(BaseModel):
    """Fund amount and the balance below which the fund is flagged."""

    amount: float = Field(..., gt=0)
    warning_amount: float = Field(..., ge=0)


class PettyCashConfigResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company_id: str
    amount: float
    warning_amount: float
    updated: datetime | None = None


class PettyCashCycleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_id: str
    cycle_no: int
    total: float
    status: str
    start_date: datetime | None = None
    end_date: datetime | None = None


class PettyCashExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    cycle_id: str
    item: str
    amount: float
    requested_by: str
    attachment: list[str] = Field(default_factory=list)
    created: datetime | None = None


class CycleWithExpensesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cycle: PettyCashCycleResponse
    expenses: list[PettyCashExpenseResponse]


class PettyCashSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    config: PettyCashConfigResponse | None
    cycles: list[CycleWithExpensesResponse]
    on_hand: float
    below_warning: bool
