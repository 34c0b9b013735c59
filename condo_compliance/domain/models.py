"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple

INCOME = "income"
EXPENSE = "expense"

PER_UNIT = "per_unit"
CONDO_WIDE = "condo_wide"


class CellStatus(str, Enum):
    """Classification of one (unit-or-condo, obligation, month) cell"""

    OK = "ok"
    PENDING = "pending"
    LATE_PAYMENT = "late_payment"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class Transaction:
    """Ledger entry, validated at ingestion"""

    id: int
    date: date
    type: str  # "income" or "expense"
    description: str
    amount: Decimal
    category: str


@dataclass(frozen=True)
class MatchRule:
    """
    Heuristic identity rule for an obligation.

    A transaction satisfies the rule when its category equals `category`, or
    when any keyword appears (case-insensitively) in one of `keyword_fields`.
    With `requires_unit`, the description must also contain the unit
    identifier verbatim.
    """

    category: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    requires_unit: bool = False
    keyword_fields: Tuple[str, ...] = ("description", "category")

    def __call__(self, txn: Transaction, unit: Optional[str] = None) -> bool:
        if self.requires_unit and (unit is None or unit not in txn.description):
            return False

        if self.category is not None and txn.category == self.category:
            return True

        haystacks = [getattr(txn, f).lower() for f in self.keyword_fields]
        return any(k.lower() in text for k in self.keywords for text in haystacks)


@dataclass(frozen=True)
class ObligationDefinition:
    """Recurring financial duty tracked month by month"""

    id: str
    label: str
    group: str  # card the obligation is reported under: quota | fund | bills
    applies_to: str  # "per_unit" or "condo_wide"
    direction: str  # "income" or "expense"
    due_day: int
    match_rule: MatchRule
    expected_amount: Optional[Decimal] = None

    @property
    def per_unit(self) -> bool:
        return self.applies_to == PER_UNIT


@dataclass
class ComplianceCell:
    """Status of one obligation in one month"""

    month: str
    status: CellStatus
    transaction_id: Optional[int] = None
    collision_ids: List[int] = field(default_factory=list)


@dataclass
class ComplianceSummary:
    """Rollup of every month for one (unit-or-condo, obligation) pair"""

    name: str
    obligation_id: str
    status: CellStatus
    message: str
    cells: List[ComplianceCell]
    pending_months: List[str]
    collisions: List[str]
    expected_amount: Optional[Decimal] = None


@dataclass
class CategoryReport:
    """Banner state and summaries for one obligation card"""

    group: str
    has_overdue: bool
    has_late_payment: bool
    all_paid: bool
    banner: CellStatus
    summaries: List[ComplianceSummary]


@dataclass
class ComplianceReport:
    """Output of a full compliance evaluation"""

    as_of: date
    months: List[str]
    categories: List[CategoryReport]


@dataclass
class MonthlyCashFlow:
    """Income and expense totals for one calendar month"""

    month: str
    label: str
    income: Decimal
    expense: Decimal


@dataclass
class CategoryTotal:
    """Expense total for one ledger category"""

    name: str
    value: Decimal


@dataclass
class LedgerStats:
    """Headline figures for the condominium ledger"""

    total_income: Decimal
    operational_income: Decimal
    fund_total: Decimal
    total_expense: Decimal
    balance: Decimal
    cash_flow: List[MonthlyCashFlow]
    top_expense_categories: List[CategoryTotal]
