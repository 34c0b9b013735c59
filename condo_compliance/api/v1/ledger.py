"""GET /v1/ledger/stats - Headline ledger figures for the dashboard"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from condo_compliance.api.v1.schemas import CashFlowSchema, CategoryTotalSchema, LedgerStatsResponse
from condo_compliance.api.dependencies import get_request_id
from condo_compliance.infrastructure.database.session import get_db
from condo_compliance.infrastructure.database.repositories import TransactionRepository
from condo_compliance.domain.exceptions import LedgerUnavailableError
from condo_compliance.domain.ledger_stats import analyze_ledger

router = APIRouter()


@router.get("/ledger/stats", response_model=LedgerStatsResponse)
def get_ledger_stats(request: Request, db: Session = Depends(get_db)):
    """
    Balance, operational income vs investment fund, monthly cash flow and
    the five largest expense categories.
    """
    try:
        transactions = TransactionRepository(db).list_transactions()
    except LedgerUnavailableError as e:
        logging.error(f"Ledger error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Transaction ledger unavailable")

    stats = analyze_ledger(transactions)

    return LedgerStatsResponse(
        total_income=stats.total_income,
        operational_income=stats.operational_income,
        fund_total=stats.fund_total,
        total_expense=stats.total_expense,
        balance=stats.balance,
        cash_flow=[
            CashFlowSchema(month=m.month, label=m.label, income=m.income, expense=m.expense)
            for m in stats.cash_flow
        ],
        top_expense_categories=[
            CategoryTotalSchema(name=c.name, value=c.value) for c in stats.top_expense_categories
        ],
    )
