"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from condo_compliance.domain.models import CellStatus, Transaction
from condo_compliance.utils.date_utils import parse_ledger_date


class TransactionSchema(BaseModel):
    """Ledger entry posted as part of a snapshot"""

    id: int
    date: date
    type: Literal["income", "expense"]
    description: str = Field("", validation_alias=AliasChoices("description", "desc"))
    amount: Decimal = Field(..., ge=0)
    category: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value):
        if isinstance(value, date):
            return value
        return parse_ledger_date(value)

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            date=self.date,
            type=self.type,
            description=self.description,
            amount=self.amount,
            category=self.category,
        )


class EvaluateRequest(BaseModel):
    """Request body for POST /v1/compliance/evaluate"""

    as_of: Optional[date] = Field(None, description="Evaluation date (defaults to today)")
    transactions: List[TransactionSchema]


class CellSchema(BaseModel):
    """Status of one obligation in one month"""

    month: str
    status: CellStatus
    transaction_id: Optional[int] = None
    collision_ids: List[int] = []


class SummarySchema(BaseModel):
    """Rolled-up status of one unit (or condo-wide bill)"""

    name: str
    obligation_id: str
    status: CellStatus
    message: str
    pending_months: List[str]
    collisions: List[str]
    expected_amount: Optional[Decimal] = None
    cells: List[CellSchema]


class CategorySchema(BaseModel):
    """One obligation card with its banner state"""

    group: str
    label: str
    has_overdue: bool
    has_late_payment: bool
    all_paid: bool
    banner: CellStatus
    summaries: List[SummarySchema]


class ComplianceResponse(BaseModel):
    """Response for GET /v1/compliance and POST /v1/compliance/evaluate"""

    as_of: date
    months: List[str]
    rejected_count: int = 0
    categories: List[CategorySchema]


class CashFlowSchema(BaseModel):
    """Income and expense for one month"""

    month: str
    label: str
    income: Decimal
    expense: Decimal


class CategoryTotalSchema(BaseModel):
    """Expense total for one ledger category"""

    name: str
    value: Decimal


class LedgerStatsResponse(BaseModel):
    """Response for GET /v1/ledger/stats"""

    total_income: Decimal
    operational_income: Decimal
    fund_total: Decimal
    total_expense: Decimal
    balance: Decimal
    cash_flow: List[CashFlowSchema]
    top_expense_categories: List[CategoryTotalSchema]
