from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from typing import Callable, List, Optional, Sequence

from calculator import WINDOW_DAYS, CalculationResult, Period, calculate_rolling_absences
from loader import AbsenceFileError, load_absences
from models import parse_date

InputFn = Callable[[str], str]


# ---------- Interactive input ----------

def read_date(prompt: str, input_fn: Optional[InputFn] = None) -> Optional[date]:
    """
    Ask until a valid YYYY-MM-DD date is entered.
    Returns None on an empty line.
    """
    input_fn = input_fn or input
    while True:
        raw = input_fn(prompt).strip()
        if not raw:
            return None
        try:
            return parse_date(raw)
        except ValueError:
            print("Invalid date format. Please use YYYY-MM-DD and try again.")


def read_absences_interactive(input_fn: Optional[InputFn] = None) -> List[Period]:
    print("\nEnter absence periods. To finish, press Enter on an empty line for the start date.")
    periods: List[Period] = []
    counter = 1
    while True:
        print(f"\n--- Absence Period #{counter} ---")
        start = read_date("Enter absence start date: ", input_fn)
        if start is None:
            break

        while True:
            end = read_date("Enter absence end date:   ", input_fn)
            if end is None:
                print("Absence end date is required for a period. Please try again.")
            elif end < start:
                print("End date must be on or after the start date. Please try again.")
            else:
                break

        periods.append((start, end))
        counter += 1
    return periods


# ---------- Output ----------

def format_result(result: CalculationResult) -> str:
    return (
        f"Absence Period: {result.absence_start.isoformat()} to {result.absence_end.isoformat()}\n"
        f"  {WINDOW_DAYS}-day calculation window: "
        f"{result.window_start.isoformat()} to {result.window_end.isoformat()}\n"
        f"  Total absence days within this window: {result.total_days_in_window}"
    )


def print_results(results: Sequence[CalculationResult]) -> None:
    print(f"\n--- Absence Calculation Results ({WINDOW_DAYS}-day rolling window) ---")
    for result in results:
        print()
        print(format_result(result))


# ---------- CLI ----------

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            f"For each absence period, count the absence days that fall in the "
            f"{WINDOW_DAYS}-day window ending on that period's end date."
        )
    )
    parser.add_argument(
        "file",
        nargs="?",
        help='JSON file with absence records: [{"start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD"}]. '
        "Omit to enter dates interactively.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s", stream=sys.stderr)

    if args.file:
        print(f"--- Reading absences from {args.file} ---")
        try:
            periods = load_absences(args.file)
        except AbsenceFileError as exc:
            print(f"Error: Failed to process file '{args.file}'. Reason: {exc}", file=sys.stderr)
            return 1
    else:
        print("--- Absence Calculator (Interactive Mode) ---")
        print("Usage: Pass a JSON file path as an argument, or enter dates interactively.")
        print("Please enter all dates in YYYY-MM-DD format.")
        try:
            periods = read_absences_interactive()
        except EOFError:
            print()
            return 1

    if not periods:
        print("\nNo absence periods to process. Exiting.")
        return 0

    print_results(calculate_rolling_absences(periods))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
