"""Petty cash service: fund configuration, replenishment cycles and expenses."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.dtos.common import CurrentUser
from app.application.dtos.petty_cash import (
    CycleWithExpenses,
    PettyCashConfig,
    PettyCashCycle,
    PettyCashExpense,
    PettyCashSummary,
)
from app.application.interfaces.repositories import (
    IPettyCashConfigRepository,
    IPettyCashCycleRepository,
    IPettyCashExpenseRepository,
)
from app.application.interfaces.services import IStorageService
from app.domain.billing import to_decimal
from app.domain.enums import PettyCashCycleStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


def format_cycle_no(cycle_no: int) -> str:
    """Cycle numbers are shown zero-padded to four digits."""
    return f"{cycle_no:04d}"


class PettyCashService:
    def __init__(
        self,
        config_repo: IPettyCashConfigRepository,
        cycle_repo: IPettyCashCycleRepository,
        expense_repo: IPettyCashExpenseRepository,
        storage: IStorageService,
    ) -> None:
        self._configs = config_repo
        self._cycles = cycle_repo
        self._expenses = expense_repo
        self._storage = storage

    async def save_config(
        self, company_id: str, amount: float, warning_amount: float
    ) -> PettyCashConfig:
        if amount < 0 or warning_amount < 0:
            raise ValidationException("Amounts cannot be negative", field="amount")
        if warning_amount > amount:
            raise ValidationException(
                "Warning amount cannot exceed the fund amount", field="warning_amount"
            )
        await self._configs.save(company_id, amount, warning_amount)
        config = await self._configs.get_by_id(company_id)
        if config is None:
            raise ResourceNotFoundException("PettyCashConfig", company_id)
        return config

    async def get_config(self, company_id: str) -> PettyCashConfig | None:
        return await self._configs.get_by_id(company_id)

    async def create_cycle(self, company_id: str) -> PettyCashCycle:
        """Open the next cycle (cycle_no of the latest plus one)."""
        latest = await self._cycles.latest(company_id)
        cycle_no = (latest.cycle_no if latest else 0) + 1
        cycle_id = await self._cycles.create(company_id, cycle_no)
        logger.info("Petty cash cycle %s opened for %s", format_cycle_no(cycle_no), company_id)
        cycle = await self._cycles.get_by_id(cycle_id)
        if cycle is None:
            raise ResourceNotFoundException("PettyCashCycle", cycle_id)
        return cycle

    async def add_expense(
        self,
        company_id: str,
        item: str,
        amount: float,
        requested_by: str,
        user: CurrentUser,
        attachments: list[UploadedFile] | None = None,
    ) -> PettyCashExpense:
        """Record an expense against the latest cycle and add it to the cycle total.

        Raises:
            ValidationException: If there is no cycle yet or the input is invalid.
        """
        if not item.strip():
            raise ValidationException("Item is required", field="item")
        if amount <= 0:
            raise ValidationException("Amount must be greater than zero", field="amount")
        cycle = await self._cycles.latest(company_id)
        if cycle is None:
            raise ValidationException("No petty cash cycle found. Create a cycle first.")

        urls: list[str] = []
        for upload in attachments or []:
            stored = await self._storage.upload(
                upload.content,
                f"petty-cash/{company_id}/{cycle.id}/{upload.filename}",
                upload.content_type,
            )
            urls.append(stored.url)

        expense_id = await self._expenses.create({
            "company_id": company_id,
            "cycle_id": cycle.id,
            "item": item,
            "amount": float(amount),
            "requested_by": requested_by,
            "attachment": urls,
            "user_id": user.uid,
        })
        expense = await self._expenses.get_by_id(expense_id)
        if expense is None:
            raise ResourceNotFoundException("PettyCashExpense", expense_id)
        return expense

    async def replenish(self, company_id: str) -> PettyCashCycle:
        """Close the active cycle and open the next one. Needs a saved config."""
        config = await self._configs.get_by_id(company_id)
        if config is None:
            raise ValidationException("Petty cash is not configured for this company")
        latest = await self._cycles.latest(company_id)
        if latest is not None and latest.status == PettyCashCycleStatus.ACTIVE.value:
            await self._cycles.update(
                latest.id, {"status": PettyCashCycleStatus.COMPLETED.value}
            )
        return await self.create_cycle(company_id)

    async def summary(self, company_id: str) -> PettyCashSummary:
        """Cycles with their expenses, cash on hand and the low-balance flag."""
        config = await self._configs.get_by_id(company_id)
        cycles = await self._cycles.list_by_company(company_id)
        listed = [
            CycleWithExpenses(cycle=c, expenses=await self._expenses.list_by_cycle(c.id))
            for c in cycles
        ]
        active = next(
            (c for c in cycles if c.status == PettyCashCycleStatus.ACTIVE.value), None
        )
        spent = to_decimal(active.total) if active else to_decimal(0)
        fund = to_decimal(config.amount) if config else to_decimal(0)
        on_hand = fund - spent
        below = config is not None and on_hand <= to_decimal(config.warning_amount)
        return PettyCashSummary(
            config=config, cycles=listed, on_hand=float(on_hand), below_warning=below
        )
