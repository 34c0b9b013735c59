"""Data access layer for the transaction ledger"""

import logging
from decimal import Decimal, InvalidOperation
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from condo_compliance.domain.exceptions import InvalidTransactionDataError, LedgerUnavailableError
from condo_compliance.domain.models import EXPENSE, INCOME, Transaction
from condo_compliance.infrastructure.database.models import LedgerTransaction
from condo_compliance.infrastructure.observability.metrics import rejected_transactions_counter
from condo_compliance.utils.date_utils import parse_ledger_date


def to_domain_transaction(row: LedgerTransaction) -> Transaction:
    """
    Validate a ledger row and convert it to a domain transaction.

    Raises:
        InvalidTransactionDataError: On a malformed date, unknown type or
            a missing/negative amount
    """
    try:
        txn_date = parse_ledger_date(row.date)
    except ValueError as e:
        raise InvalidTransactionDataError(f"Transaction {row.id}: {e}") from e

    if row.type not in (INCOME, EXPENSE):
        raise InvalidTransactionDataError(f"Transaction {row.id}: unknown type {row.type!r}")

    try:
        amount = Decimal(str(row.amount))
    except (InvalidOperation, TypeError) as e:
        raise InvalidTransactionDataError(f"Transaction {row.id}: invalid amount {row.amount!r}") from e
    if not amount.is_finite() or amount < 0:
        raise InvalidTransactionDataError(f"Transaction {row.id}: invalid amount {row.amount!r}")

    return Transaction(
        id=row.id,
        date=txn_date,
        type=row.type,
        description=row.description or "",
        amount=amount,
        category=row.category or "",
    )


class TransactionRepository:
    """Read-only repository over the ledger's transactions"""

    def __init__(self, db: Session):
        self.db = db
        self.rejected_count = 0

    def list_transactions(self) -> List[Transaction]:
        """
        Load the full ledger snapshot.

        Malformed rows are rejected here, logged and counted, and never reach
        the compliance engine. A rejected payment therefore shows up as
        unpaid rather than failing the whole evaluation.

        Raises:
            LedgerUnavailableError: When the ledger cannot be queried
        """
        try:
            rows = self.db.query(LedgerTransaction).order_by(LedgerTransaction.id).all()
        except SQLAlchemyError as e:
            raise LedgerUnavailableError(f"Could not read transaction ledger: {e}") from e

        transactions = []
        self.rejected_count = 0
        for row in rows:
            try:
                transactions.append(to_domain_transaction(row))
            except InvalidTransactionDataError as e:
                self.rejected_count += 1
                rejected_transactions_counter.inc()
                logging.warning(f"Rejected ledger row: {e}", extra={"transaction_id": row.id})

        return transactions
