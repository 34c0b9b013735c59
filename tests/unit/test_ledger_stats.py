"""Unit tests for ledger statistics"""

from datetime import date
from decimal import Decimal
from condo_compliance.domain.models import Transaction
from condo_compliance.domain.ledger_stats import analyze_ledger


def txn(id, day, type, description, amount, category=""):
    return Transaction(id, date.fromisoformat(day), type, description, Decimal(amount), category)


def test_analyze_ledger_splits_fund_from_operational_income():
    """Test fund contributions are kept apart from operational income"""
    transactions = [
        txn(1, "2025-11-05", "income", "Cota Mensal - Casa 101", "850.00", "Taxa Condominial"),
        txn(2, "2025-11-05", "income", "Fundo Casa 101", "70.00"),
        txn(3, "2025-11-06", "income", "Aporte", "70.00", "Fundo de Investimento"),
        txn(4, "2025-11-09", "expense", "Conta de luz", "412.30", "Energia"),
    ]

    stats = analyze_ledger(transactions)

    assert stats.total_income == Decimal("990.00")
    assert stats.fund_total == Decimal("140.00")
    assert stats.operational_income == Decimal("850.00")
    assert stats.total_expense == Decimal("412.30")
    assert stats.balance == Decimal("577.70")


def test_analyze_ledger_fund_keyword_ignores_category():
    """Test only the fund category or a "fundo" description counts as fund income"""
    transactions = [
        txn(1, "2025-11-05", "income", "Pagamento Casa 101", "100.00", "Fundo de Obras"),
        txn(2, "2025-11-05", "income", "Fundo Casa 102", "70.00"),
    ]

    stats = analyze_ledger(transactions)

    assert stats.fund_total == Decimal("70.00")
    assert stats.operational_income == Decimal("100.00")


def test_analyze_ledger_monthly_cash_flow_sorted_ascending():
    """Test cash flow is grouped by month, oldest first"""
    transactions = [
        txn(1, "2025-11-05", "income", "Cota Casa 101", "850.00"),
        txn(2, "2025-09-20", "expense", "Jardinagem", "200.00", "Manutenção"),
        txn(3, "2025-11-07", "expense", "Limpeza", "150.00", "Limpeza"),
        txn(4, "2025-09-02", "income", "Cota Casa 102", "850.00"),
    ]

    stats = analyze_ledger(transactions)

    assert [(m.month, m.label, m.income, m.expense) for m in stats.cash_flow] == [
        ("2025-09", "09/2025", Decimal("850.00"), Decimal("200.00")),
        ("2025-11", "11/2025", Decimal("850.00"), Decimal("150.00")),
    ]


def test_analyze_ledger_top_five_expense_categories():
    """Test only the five largest expense categories are kept, largest first"""
    amounts = {"A": "10", "B": "60", "C": "30", "D": "50", "E": "20", "F": "40"}
    transactions = [
        txn(i, "2025-11-01", "expense", "Despesa", amount, category)
        for i, (category, amount) in enumerate(amounts.items(), start=1)
    ]
    transactions.append(txn(99, "2025-11-02", "expense", "Despesa", "15", "A"))

    stats = analyze_ledger(transactions)

    assert [(c.name, c.value) for c in stats.top_expense_categories] == [
        ("B", Decimal("60")),
        ("D", Decimal("50")),
        ("F", Decimal("40")),
        ("C", Decimal("30")),
        ("A", Decimal("25")),
    ]


def test_analyze_ledger_empty():
    """Test an empty ledger yields zero totals"""
    stats = analyze_ledger([])

    assert stats.balance == Decimal("0")
    assert stats.cash_flow == []
    assert stats.top_expense_categories == []
