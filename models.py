from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict

from calculator import Period

DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD date (surrounding whitespace ignored)."""
    if not isinstance(value, str):
        raise TypeError(f"Expected a date string, got {type(value).__name__}.")
    value = value.strip()
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date format: {value!r}. Use YYYY-MM-DD (e.g., 2023-04-01).") from None


@dataclass(frozen=True)
class AbsencePeriod:
    """
    One reported absence, as read from a file record:
    {"start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD"}

    Both dates are inclusive. No ordering check happens here; callers
    decide what to do with a period that fails is_valid().
    """
    start: date
    end: date

    def is_valid(self) -> bool:
        return self.end >= self.start

    def as_tuple(self) -> Period:
        return self.start, self.end


def row_to_period(row: Dict[str, Any]) -> AbsencePeriod:
    return AbsencePeriod(
        start=parse_date(row["start_date"]),
        end=parse_date(row["end_date"]),
    )
