"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from condo_compliance.domain.models import ComplianceReport


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "condo-compliance"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_evaluation(
    request_id: str,
    source: str,
    transaction_count: int,
    report: ComplianceReport,
    duration_ms: float,
) -> None:
    """Log structured evaluation outcome for delinquency analysis"""
    logging.info(
        "Compliance evaluation completed",
        extra={
            "request_id": request_id,
            "step": "evaluation_complete",
            "source": source,
            "as_of": report.as_of.isoformat(),
            "transaction_count": transaction_count,
            "month_count": len(report.months),
            "banners": {c.group: c.banner.value for c in report.categories},
            "duration_ms": duration_ms,
        },
    )

    for category in report.categories:
        for summary in category.summaries:
            if summary.collisions:
                logging.warning(
                    "Multiple transactions matched the same obligation",
                    extra={
                        "request_id": request_id,
                        "obligation_id": summary.obligation_id,
                        "summary_name": summary.name,
                        "months": summary.collisions,
                    },
                )
