from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Length of the trailing window, counted back from the period's end date.
WINDOW_DAYS = 365

# Periods separated by at most this many days are merged into one span.
MERGE_GAP_DAYS = 1

Period = Tuple[date, date]


class MalformedIntervalError(ValueError):
    """An absence period whose end date is before its start date."""

    def __init__(self, period: Period):
        self.period = period
        start, end = period
        super().__init__(
            f"Absence period end date {end.isoformat()} is before start date {start.isoformat()}."
        )


@dataclass(frozen=True)
class CalculationResult:
    """
    Absence total for the 365-day window that ends on one reported period.

    absence_start / absence_end: the period as it was reported
    window_start / window_end:   [absence_end - 365 days, absence_end]
    total_days_in_window:        merged absence days inside the window, inclusive
    """
    absence_start: date
    absence_end: date
    window_start: date
    window_end: date
    total_days_in_window: int

    def exceeds(self, max_days: int) -> bool:
        """True when the window holds more absence days than allowed."""
        return self.total_days_in_window > max_days


def _check_period(period: Period) -> None:
    start, end = period
    if end < start:
        raise MalformedIntervalError(period)


def _overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> Optional[Period]:
    """Return overlapping date range [start, end] inclusive, else None."""
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    if start > end:
        return None
    return start, end


def merge_intervals(periods: Sequence[Period]) -> List[Period]:
    """
    Merge overlapping or adjacent periods into sorted, disjoint spans.

    A period starting the day after the current span ends is treated as
    continuous absence and merged. Consecutive spans in the result are
    separated by at least two days.
    """
    for period in periods:
        _check_period(period)

    if not periods:
        return []

    ordered = sorted(periods, key=lambda p: p[0])
    merged: List[Period] = []
    cur_start, cur_end = ordered[0]
    for start, end in ordered[1:]:
        if start <= cur_end + timedelta(days=MERGE_GAP_DAYS):
            cur_end = max(cur_end, end)
        else:
            merged.append((cur_start, cur_end))
            cur_start, cur_end = start, end
    merged.append((cur_start, cur_end))

    logger.debug("Merged %d absence periods into %d spans", len(periods), len(merged))
    return merged


def window_sum(merged_periods: Sequence[Period], window_start: date, window_end: date) -> int:
    """
    Count absence days within [window_start, window_end] inclusive.

    merged_periods must be disjoint (see merge_intervals), otherwise shared
    days are counted more than once.
    """
    if window_end < window_start:
        return 0

    total = 0
    for start, end in merged_periods:
        overlap = _overlap(window_start, window_end, start, end)
        if overlap:
            o_start, o_end = overlap
            total += (o_end - o_start).days + 1

    return total


def calculate_rolling_absences(periods: Sequence[Period]) -> List[CalculationResult]:
    """
    For every period, in the order given, sum the absence days that fall in
    the 365-day window ending on that period's end date.

    Days are taken from the merged set of all periods, so overlapping
    reports are never double-counted.
    """
    if not periods:
        return []

    merged = merge_intervals(periods)

    results: List[CalculationResult] = []
    for absence_start, absence_end in periods:
        window_end = absence_end
        window_start = absence_end - timedelta(days=WINDOW_DAYS)
        results.append(
            CalculationResult(
                absence_start=absence_start,
                absence_end=absence_end,
                window_start=window_start,
                window_end=window_end,
                total_days_in_window=window_sum(merged, window_start, window_end),
            )
        )

    return results
