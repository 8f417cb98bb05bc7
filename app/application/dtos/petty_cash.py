"""DTOs for petty cash configuration, cycles and expenses."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PettyCashConfig:
    """Company petty cash fund and its low-balance warning level."""

    company_id: str
    amount: float
    warning_amount: float
    updated: datetime | None = None


@dataclass(frozen=True)
class PettyCashCycle:
    """A replenishment cycle; total is the sum of its expenses."""

    id: str
    company_id: str
    cycle_no: int
    total: float
    status: str
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class PettyCashExpense:
    """One expense paid from petty cash."""

    id: str
    company_id: str
    cycle_id: str
    item: str
    amount: float
    requested_by: str
    attachment: list[str] = field(default_factory=list)
    user_id: str = ""
    created: datetime | None = None


@dataclass(frozen=True)
class CycleWithExpenses:
    """A cycle with its expenses, as listed on the petty cash page."""

    cycle: PettyCashCycle
    expenses: list[PettyCashExpense]


@dataclass(frozen=True)
class PettyCashSummary:
    """Fund state for a company."""

    config: PettyCashConfig | None
    cycles: list[CycleWithExpenses]
    on_hand: float
    below_warning: bool
