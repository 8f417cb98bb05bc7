"""Firestore-backed finance request repository (``request``).

Stored field names are the column labels of the finance table
(``Request No.``, ``Requested Item``, ``O.R No.``); they are back-quoted in
update masks by the REST client.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.finance_request import FinanceRequestResult
from app.infrastructure.firebase.collections import COLLECTION_FINANCE_REQUESTS
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_float,
    as_int,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime

FIELD_REQUEST_NO = "Request No."
FIELD_REQUESTOR = "Requestor"
FIELD_REQUESTED_ITEM = "Requested Item"
FIELD_AMOUNT = "Amount"
FIELD_APPROVED_BY = "Approved By"
FIELD_ATTACHMENTS = "Attachments"
FIELD_ACTIONS = "Actions"
FIELD_DATE_RELEASED = "Date Released"
FIELD_CASHBACK = "Cashback"
FIELD_OR_NO = "O.R No."
FIELD_INVOICE_NO = "Invoice No."
FIELD_QUOTATION = "Quotation"
FIELD_DATE_REQUESTED = "Date Requested"


class FirestoreFinanceRequestRepository(FirestoreRepository[FinanceRequestResult]):
    collection_name = COLLECTION_FINANCE_REQUESTS
    resource_type = "FinanceRequest"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> FinanceRequestResult:
        cashback = data.get(FIELD_CASHBACK)
        return FinanceRequestResult(
            id=doc_id,
            company_id=as_str(data.get("company_id")),
            request_type=as_str(data.get("request_type")),
            request_no=as_int(data.get(FIELD_REQUEST_NO)),
            requestor=as_str(data.get(FIELD_REQUESTOR)),
            requested_item=as_str(data.get(FIELD_REQUESTED_ITEM)),
            amount=as_float(data.get(FIELD_AMOUNT)),
            approved_by=as_str(data.get(FIELD_APPROVED_BY)),
            attachments=as_str(data.get(FIELD_ATTACHMENTS)),
            actions=as_str(data.get(FIELD_ACTIONS)) or "Pending",
            deleted=bool(data.get("deleted", False)),
            date_released=coerce_datetime(data.get(FIELD_DATE_RELEASED)),
            cashback=None if cashback is None else as_int(cashback),
            or_no=data.get(FIELD_OR_NO),
            invoice_no=data.get(FIELD_INVOICE_NO),
            quotation=data.get(FIELD_QUOTATION),
            date_requested=coerce_datetime(data.get(FIELD_DATE_REQUESTED)),
            created=coerce_datetime(data.get("created")),
        )

    async def create(self, data: dict[str, Any]) -> str:
        return await self._insert(data)

    async def update(self, request_id: str, fields: dict[str, Any]) -> None:
        await self._patch(request_id, fields)

    async def list_by_company(self, company_id: str) -> list[FinanceRequestResult]:
        q = (
            self._coll.where("company_id", "==", company_id)
            .where("deleted", "==", False)
            .order_by("created", "desc")
        )
        return await self._all(q)
