"""GET /v1/compliance and POST /v1/compliance/evaluate - obligation status endpoints"""

import time
import logging
from datetime import date
from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from condo_compliance.api.v1.schemas import (
    CategorySchema,
    CellSchema,
    ComplianceResponse,
    EvaluateRequest,
    SummarySchema,
)
from condo_compliance.api.dependencies import (
    get_registry,
    get_request_id,
    get_today,
    get_units,
    require_compliance_role,
)
from condo_compliance.infrastructure.database.session import get_db
from condo_compliance.infrastructure.database.repositories import TransactionRepository
from condo_compliance.domain.compliance import make_compliance_report
from condo_compliance.domain.exceptions import LedgerUnavailableError
from condo_compliance.domain.models import ComplianceReport, ObligationDefinition, Transaction
from condo_compliance.domain.obligations import GROUP_LABELS
from condo_compliance.infrastructure.observability.metrics import record_evaluation
from condo_compliance.infrastructure.observability.logging import log_evaluation

router = APIRouter(dependencies=[Depends(require_compliance_role)])


def to_response(report: ComplianceReport, rejected_count: int = 0) -> ComplianceResponse:
    """Map the domain report onto the API schema"""
    return ComplianceResponse(
        as_of=report.as_of,
        months=report.months,
        rejected_count=rejected_count,
        categories=[
            CategorySchema(
                group=c.group,
                label=GROUP_LABELS.get(c.group, c.group),
                has_overdue=c.has_overdue,
                has_late_payment=c.has_late_payment,
                all_paid=c.all_paid,
                banner=c.banner,
                summaries=[
                    SummarySchema(
                        name=s.name,
                        obligation_id=s.obligation_id,
                        status=s.status,
                        message=s.message,
                        pending_months=s.pending_months,
                        collisions=s.collisions,
                        expected_amount=s.expected_amount,
                        cells=[
                            CellSchema(
                                month=cell.month,
                                status=cell.status,
                                transaction_id=cell.transaction_id,
                                collision_ids=cell.collision_ids,
                            )
                            for cell in s.cells
                        ],
                    )
                    for s in c.summaries
                ],
            )
            for c in report.categories
        ],
    )


def evaluate(
    source: str,
    transactions: Sequence[Transaction],
    units: List[str],
    registry: List[ObligationDefinition],
    today: date,
    request_id: str,
) -> ComplianceReport:
    """Run the engine and record metrics and logs for the evaluation"""
    start_time = time.perf_counter()

    report = make_compliance_report(transactions, units, registry, today)

    duration = time.perf_counter() - start_time
    record_evaluation(source, report, duration)
    log_evaluation(request_id, source, len(transactions), report, duration * 1000)

    return report


@router.get("/compliance", response_model=ComplianceResponse)
def get_compliance(
    as_of: Optional[date] = Query(None, description="Evaluation date (defaults to today)"),
    db: Session = Depends(get_db),
    units: List[str] = Depends(get_units),
    registry: List[ObligationDefinition] = Depends(get_registry),
    today: date = Depends(get_today),
    request_id: str = Depends(get_request_id),
):
    """
    Evaluate every obligation against the stored transaction ledger.

    Flow:
    1. Load the ledger snapshot (malformed rows are rejected and counted)
    2. Build the month universe and classify every unit x month x obligation cell
    3. Roll cells up per unit and per obligation card
    """
    repo = TransactionRepository(db)
    try:
        transactions = repo.list_transactions()
    except LedgerUnavailableError as e:
        logging.error(f"Ledger error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Transaction ledger unavailable")

    report = evaluate("ledger", transactions, units, registry, as_of or today, request_id)
    return to_response(report, repo.rejected_count)


@router.post("/compliance/evaluate", response_model=ComplianceResponse)
def evaluate_snapshot(
    request_body: EvaluateRequest,
    units: List[str] = Depends(get_units),
    registry: List[ObligationDefinition] = Depends(get_registry),
    today: date = Depends(get_today),
    request_id: str = Depends(get_request_id),
):
    """
    Evaluate a ledger snapshot supplied by the caller.

    Malformed transactions fail request validation (422) before the engine
    runs.
    """
    transactions = [t.to_domain() for t in request_body.transactions]
    report = evaluate("snapshot", transactions, units, registry, request_body.as_of or today, request_id)
    return to_response(report)
