"""Prometheus metrics for monitoring evaluations, delinquency and ledger data quality"""

from prometheus_client import Counter, Histogram

from condo_compliance.domain.models import ComplianceReport

# Evaluation metrics
evaluation_counter = Counter(
    "condo_compliance_evaluations_total",
    "Total compliance evaluations run",
    ["source"],  # ledger | snapshot
)

evaluation_duration_histogram = Histogram(
    "condo_compliance_evaluation_seconds",
    "Time spent evaluating the full unit x month x obligation grid",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0],
)

rolled_status_counter = Counter(
    "condo_compliance_rolled_status_total",
    "Rolled-up statuses produced per obligation group",
    ["group", "status"],  # status: ok | pending | late_payment | overdue
)

match_collision_counter = Counter(
    "condo_compliance_match_collisions_total",
    "Cells where more than one transaction matched the same obligation",
    ["group"],
)

# Ledger data quality
rejected_transactions_counter = Counter(
    "condo_ledger_rejected_rows_total",
    "Ledger rows rejected at ingestion (malformed date, type or amount)",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(source: str, report: ComplianceReport, duration_seconds: float) -> None:
    """Record evaluation metrics for monitoring delinquency over time"""
    evaluation_counter.labels(source=source).inc()
    evaluation_duration_histogram.observe(duration_seconds)

    for category in report.categories:
        for summary in category.summaries:
            rolled_status_counter.labels(group=category.group, status=summary.status.value).inc()
            if summary.collisions:
                match_collision_counter.labels(group=category.group).inc(len(summary.collisions))
