"""Recurring obligation compliance engine - core business logic for payment status"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from condo_compliance.domain.models import (
    CategoryReport,
    CellStatus,
    ComplianceCell,
    ComplianceReport,
    ComplianceSummary,
    ObligationDefinition,
    Transaction,
)
from condo_compliance.utils.date_utils import build_month_universe, format_month_short, month_key


def find_matches(
    definition: ObligationDefinition,
    month: str,
    unit: Optional[str],
    transactions: Iterable[Transaction],
) -> List[Transaction]:
    """
    Every transaction that could discharge `definition` for `unit` in `month`.

    A candidate must be dated in the month, flow in the obligation's direction
    and satisfy its match rule. There is no amount check: any amount counts
    as payment.
    """
    return [
        t
        for t in transactions
        if month_key(t.date) == month
        and t.type == definition.direction
        and definition.match_rule(t, unit)
    ]


def match_obligation(
    definition: ObligationDefinition,
    month: str,
    unit: Optional[str],
    transactions: Iterable[Transaction],
) -> Tuple[Optional[Transaction], List[Transaction]]:
    """
    Pick the transaction that discharges a cell.

    Returns:
        (match, collisions): the earliest-dated candidate (ledger order breaks
        ties) and every other candidate for the same cell
    """
    candidates = find_matches(definition, month, unit, transactions)
    if not candidates:
        return None, []

    # sorted() is stable, so equal dates keep ledger order
    ordered = sorted(candidates, key=lambda t: t.date)
    return ordered[0], ordered[1:]


def classify_cell(
    matched_day: Optional[int],
    is_current_month: bool,
    today_day: int,
    due_day: int,
) -> CellStatus:
    """
    Classify one cell from scratch.

    A past month is either paid (ok) or overdue; there is no grace period once
    the month has elapsed. Only the current month can be pending (not yet due)
    or late_payment (paid after the due day).
    """
    if matched_day is not None:
        if is_current_month and matched_day > due_day:
            return CellStatus.LATE_PAYMENT
        return CellStatus.OK

    if is_current_month and today_day <= due_day:
        return CellStatus.PENDING
    return CellStatus.OVERDUE


def build_message(status: CellStatus, pending_months: Sequence[str], due_day: int) -> str:
    if pending_months:
        suffix = "..." if len(pending_months) > 2 else ""
        return f"Pending: {', '.join(pending_months[:2])}{suffix}"
    if status == CellStatus.PENDING:
        return f"Awaiting (due day {due_day})"
    if status == CellStatus.LATE_PAYMENT:
        return "Paid late this month"
    return "Up to date (full history)"


def summarize_cells(
    name: str,
    definition: ObligationDefinition,
    cells: List[ComplianceCell],
    current_month: str,
) -> ComplianceSummary:
    """
    Roll the per-month cells of one (unit-or-condo, obligation) pair up.

    Any overdue month, past or current, makes the pair overdue. Otherwise the
    pair takes the status of the current month.
    """
    pending_months = [format_month_short(c.month) for c in cells if c.status == CellStatus.OVERDUE]

    if pending_months:
        status = CellStatus.OVERDUE
    else:
        current = next((c for c in cells if c.month == current_month), None)
        status = current.status if current else CellStatus.OK

    return ComplianceSummary(
        name=name,
        obligation_id=definition.id,
        status=status,
        message=build_message(status, pending_months, definition.due_day),
        cells=cells,
        pending_months=pending_months,
        collisions=[c.month for c in cells if c.collision_ids],
        expected_amount=definition.expected_amount,
    )


def evaluate_obligation(
    definition: ObligationDefinition,
    unit: Optional[str],
    months: Sequence[str],
    transactions_by_month: Dict[str, List[Transaction]],
    today: date,
) -> ComplianceSummary:
    """Classify every month for one (unit-or-condo, obligation) pair and roll it up"""
    current_month = month_key(today)
    cells = []

    for month in months:
        match, collisions = match_obligation(
            definition, month, unit, transactions_by_month.get(month, ())
        )
        status = classify_cell(
            matched_day=match.date.day if match else None,
            is_current_month=month == current_month,
            today_day=today.day,
            due_day=definition.due_day,
        )
        cells.append(
            ComplianceCell(
                month=month,
                status=status,
                transaction_id=match.id if match else None,
                collision_ids=[t.id for t in collisions],
            )
        )

    name = unit if definition.per_unit and unit is not None else definition.label
    return summarize_cells(name, definition, cells, current_month)


def build_banner(group: str, summaries: List[ComplianceSummary]) -> CategoryReport:
    """
    Category-level banner for one obligation card.

    Precedence: overdue, then pending (something not yet paid but still in
    grace), then late_payment (all paid, some late), then ok.
    """
    has_overdue = any(s.status == CellStatus.OVERDUE for s in summaries)
    has_late_payment = any(s.status == CellStatus.LATE_PAYMENT for s in summaries)
    all_paid = all(s.status in (CellStatus.OK, CellStatus.LATE_PAYMENT) for s in summaries)

    if has_overdue:
        banner = CellStatus.OVERDUE
    elif not all_paid:
        banner = CellStatus.PENDING
    elif has_late_payment:
        banner = CellStatus.LATE_PAYMENT
    else:
        banner = CellStatus.OK

    return CategoryReport(
        group=group,
        has_overdue=has_overdue,
        has_late_payment=has_late_payment,
        all_paid=all_paid,
        banner=banner,
        summaries=summaries,
    )


def make_compliance_report(
    transactions: Iterable[Transaction],
    units: Sequence[str],
    registry: Sequence[ObligationDefinition],
    today: date,
) -> ComplianceReport:
    """
    Main entry point: evaluate every obligation in the registry against the ledger.

    Per-unit obligations are evaluated once per unit in roster order,
    condo-wide obligations once overall. Summaries are grouped into one
    category report per obligation group, in registry order. `today` is the
    single clock reading used for the whole evaluation.
    """
    snapshot = tuple(transactions)
    months = build_month_universe(snapshot, today)

    transactions_by_month: Dict[str, List[Transaction]] = {}
    for txn in snapshot:
        transactions_by_month.setdefault(month_key(txn.date), []).append(txn)

    grouped: Dict[str, List[ComplianceSummary]] = {}
    for definition in registry:
        summaries = grouped.setdefault(definition.group, [])
        targets = list(units) if definition.per_unit else [None]
        for unit in targets:
            summaries.append(evaluate_obligation(definition, unit, months, transactions_by_month, today))

    return ComplianceReport(
        as_of=today,
        months=months,
        categories=[build_banner(group, summaries) for group, summaries in grouped.items()],
    )
