"""Firestore-backed petty cash repositories: config, cycles and expenses."""

from __future__ import annotations

from typing import Any

from app.application.dtos.petty_cash import (
    PettyCashConfig,
    PettyCashCycle,
    PettyCashExpense,
)
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase._rest_client import DocumentNotFoundError
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP, Increment
from app.infrastructure.firebase.collections import (
    COLLECTION_PETTY_CASH_CONFIG,
    COLLECTION_PETTY_CASH_CYCLES,
    COLLECTION_PETTY_CASH_EXPENSES,
)
from app.infrastructure.firebase.repositories.base import (
    FirestoreRepository,
    as_float,
    as_int,
    as_str,
)
from app.shared.utils.datetime import coerce_datetime
from app.shared.utils.generators import generate_cuid


class FirestorePettyCashConfigRepository(FirestoreRepository[PettyCashConfig]):
    """One config document per company, keyed by company ID."""

    collection_name = COLLECTION_PETTY_CASH_CONFIG
    resource_type = "PettyCashConfig"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> PettyCashConfig:
        return PettyCashConfig(
            company_id=as_str(data.get("company_id")) or doc_id,
            amount=as_float(data.get("amount")),
            warning_amount=as_float(data.get("warning_amount")),
            updated=coerce_datetime(data.get("updated")),
        )

    async def save(self, company_id: str, amount: float, warning_amount: float) -> None:
        await self._coll.document(company_id).set(
            {
                "company_id": company_id,
                "amount": amount,
                "warning_amount": warning_amount,
                "updated": SERVER_TIMESTAMP,
            },
            merge=True,
        )


class FirestorePettyCashCycleRepository(FirestoreRepository[PettyCashCycle]):
    collection_name = COLLECTION_PETTY_CASH_CYCLES
    resource_type = "PettyCashCycle"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> PettyCashCycle:
        return PettyCashCycle(
            id=doc_id,
            company_id=as_str(data.get("company_id")),
            cycle_no=as_int(data.get("cycle_no")),
            total=as_float(data.get("total")),
            status=as_str(data.get("status")) or "active",
            start_date=coerce_datetime(data.get("startDate")),
            end_date=coerce_datetime(data.get("endDate")),
        )

    async def list_by_company(self, company_id: str) -> list[PettyCashCycle]:
        """Cycles of a company, latest first."""
        q = self._coll.where("company_id", "==", company_id).order_by("cycle_no", "desc")
        return await self._all(q)

    async def latest(self, company_id: str) -> PettyCashCycle | None:
        q = self._coll.where("company_id", "==", company_id).order_by("cycle_no", "desc").limit(1)
        snapshots = await q.get()
        return self._snapshot_result(snapshots[0]) if snapshots else None

    async def create(self, company_id: str, cycle_no: int) -> str:
        return await self._insert({
            "company_id": company_id,
            "cycle_no": cycle_no,
            "total": 0,
            "status": "active",
            "startDate": SERVER_TIMESTAMP,
        })

    async def update(self, cycle_id: str, fields: dict[str, Any]) -> None:
        await self._patch(cycle_id, fields)


class FirestorePettyCashExpenseRepository(FirestoreRepository[PettyCashExpense]):
    collection_name = COLLECTION_PETTY_CASH_EXPENSES
    resource_type = "PettyCashExpense"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> PettyCashExpense:
        attachment = data.get("attachment") or []
        if isinstance(attachment, str):
            attachment = [attachment]
        return PettyCashExpense(
            id=doc_id,
            company_id=as_str(data.get("company_id")),
            cycle_id=as_str(data.get("cycle_id")),
            item=as_str(data.get("item")),
            amount=as_float(data.get("amount")),
            requested_by=as_str(data.get("requested_by")),
            attachment=[str(a) for a in attachment],
            user_id=as_str(data.get("user_id")),
            created=coerce_datetime(data.get("created")),
        )

    async def create(self, data: dict[str, Any]) -> str:
        """Create the expense and add its amount to the cycle total in one commit.

        The total is a server-side increment, so concurrent expenses on the
        same cycle are all counted.
        """
        expense_ref = self._coll.document(generate_cuid())
        cycles = self._client.collection(COLLECTION_PETTY_CASH_CYCLES)
        batch = self._client.batch()
        batch.create(
            expense_ref, {**data, "created": SERVER_TIMESTAMP, "updated": SERVER_TIMESTAMP}
        )
        batch.update(
            cycles.document(data["cycle_id"]),
            {"total": Increment(data["amount"]), "updated": SERVER_TIMESTAMP},
        )
        try:
            await batch.commit()
        except DocumentNotFoundError:
            raise ResourceNotFoundException("PettyCashCycle", data["cycle_id"]) from None
        return expense_ref.id

    async def list_by_cycle(self, cycle_id: str) -> list[PettyCashExpense]:
        q = self._coll.where("cycle_id", "==", cycle_id).order_by("created", "desc")
        return await self._all(q)
