"""Ledger statistics - headline totals, monthly cash flow and expense breakdown"""

from decimal import Decimal
from typing import Dict, Iterable, List

from condo_compliance.domain.models import (
    EXPENSE,
    INCOME,
    CategoryTotal,
    LedgerStats,
    MonthlyCashFlow,
    Transaction,
)
from condo_compliance.domain.obligations import FUND_RULE
from condo_compliance.utils.date_utils import format_month_long, month_key

TOP_CATEGORY_COUNT = 5


def analyze_ledger(transactions: Iterable[Transaction]) -> LedgerStats:
    """
    Summarize the ledger for the dashboard.

    Income is split into operational income (quotas and other receipts) and
    the investment fund, using the same rule as the fund obligation but
    without a unit requirement. An empty ledger yields zero totals.
    """
    snapshot = tuple(transactions)
    zero = Decimal("0")

    total_income = zero
    fund_total = zero
    total_expense = zero
    by_month: Dict[str, MonthlyCashFlow] = {}
    by_category: Dict[str, Decimal] = {}

    for txn in snapshot:
        key = month_key(txn.date)
        month = by_month.get(key)
        if month is None:
            month = by_month[key] = MonthlyCashFlow(
                month=key, label=format_month_long(key), income=zero, expense=zero
            )

        if txn.type == INCOME:
            total_income += txn.amount
            month.income += txn.amount
            if FUND_RULE(txn):
                fund_total += txn.amount
        elif txn.type == EXPENSE:
            total_expense += txn.amount
            month.expense += txn.amount
            by_category[txn.category] = by_category.get(txn.category, zero) + txn.amount

    # Largest first; ties keep first-seen order
    top_categories: List[CategoryTotal] = [
        CategoryTotal(name=name, value=value)
        for name, value in sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    ][:TOP_CATEGORY_COUNT]

    return LedgerStats(
        total_income=total_income,
        operational_income=total_income - fund_total,
        fund_total=fund_total,
        total_expense=total_expense,
        balance=total_income - total_expense,
        cash_flow=[by_month[key] for key in sorted(by_month)],
        top_expense_categories=top_categories,
    )
