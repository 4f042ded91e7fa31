from __future__ import annotations

import json
import logging
from typing import Any, List

from calculator import Period
from models import row_to_period

logger = logging.getLogger(__name__)


class AbsenceFileError(Exception):
    """The absence file could not be read or does not hold valid periods."""


def _extract_records(doc: Any) -> List[Any]:
    """
    The file must hold a JSON array of records. A bare object is rejected
    rather than guessed at.
    """
    if not isinstance(doc, list):
        raise AbsenceFileError(
            f"Expected a JSON array of absence records, got {type(doc).__name__}."
        )
    return doc


def parse_absences(data: str) -> List[Period]:
    """
    Parse a JSON document like
        [{"start_date": "2023-01-01", "end_date": "2023-01-10"}, ...]
    into (start, end) pairs, in file order.

    Records whose end date is before the start date are skipped with a
    warning. Anything else that is wrong fails the whole file.
    """
    try:
        doc = json.loads(data)
    except json.JSONDecodeError as exc:
        raise AbsenceFileError(f"Invalid JSON: {exc}") from exc

    periods: List[Period] = []
    for idx, row in enumerate(_extract_records(doc), start=1):
        if not isinstance(row, dict):
            raise AbsenceFileError(f"Record {idx} is not an object.")
        try:
            period = row_to_period(row)
        except KeyError as exc:
            raise AbsenceFileError(f"Record {idx} is missing field {exc}.") from exc
        except (TypeError, ValueError) as exc:
            raise AbsenceFileError(f"Record {idx}: {exc}") from exc

        if not period.is_valid():
            logger.warning(
                "Invalid period in JSON file. End date %s is before start date %s. Skipping.",
                period.end.isoformat(),
                period.start.isoformat(),
            )
            continue
        periods.append(period.as_tuple())

    logger.debug("Accepted %d absence periods", len(periods))
    return periods


def load_absences(path: str) -> List[Period]:
    try:
        with open(path, encoding="utf-8") as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise AbsenceFileError(str(exc)) from exc
    return parse_absences(data)


def parse_upload(raw: bytes) -> List[Period]:
    """Decode an uploaded file as UTF-8 and parse it like parse_absences."""
    try:
        data = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise AbsenceFileError(f"File is not UTF-8 text: {exc}") from exc
    return parse_absences(data)
