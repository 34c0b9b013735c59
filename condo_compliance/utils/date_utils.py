"""Date manipulation utilities"""

import re
from datetime import date
from typing import Iterable, List

from condo_compliance.domain.models import Transaction

_LEDGER_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_ledger_date(value: str) -> date:
    """
    Parse a ledger date, accepting only the calendar form "YYYY-MM-DD".

    Raises:
        ValueError: On any other format or an impossible date
    """
    if not isinstance(value, str) or not _LEDGER_DATE.match(value):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return date.fromisoformat(value)


def month_key(day: date) -> str:
    """Calendar month of a date as "YYYY-MM" """
    return f"{day.year:04d}-{day.month:02d}"


def format_month_short(key: str) -> str:
    """"2025-11" -> "11/25" """
    year, month = key.split("-")
    return f"{month}/{year[2:]}"


def format_month_long(key: str) -> str:
    """"2025-11" -> "11/2025" """
    year, month = key.split("-")
    return f"{month}/{year}"


def build_month_universe(transactions: Iterable[Transaction], today: date) -> List[str]:
    """
    Every month present in the ledger plus the current month, most recent first.

    "YYYY-MM" keys sort chronologically as plain strings.
    """
    months = {month_key(t.date) for t in transactions}
    months.add(month_key(today))
    return sorted(months, reverse=True)
