#!/usr/bin/env python3
"""
Create a workload report from a JSON dump of calendar events.

The input is either a JSON list of events or an object with an "items" list
(the shape of a Google Calendar events.list response).

Generates an Excel report with four sheets:
- Daily Workload: hours and workload level per day
- Visits: every work event
- Rule Violations: everything the rules engine flagged
- Burnout Risk: score, level and contributing factors

Usage:
    uv run python src/scripts/create_workload_report.py --events events.json --month 2025-11
    uv run python src/scripts/create_workload_report.py --events events.json --start 2025-11-03 --end 2025-11-16
"""

import argparse
import calendar
import json
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import OUTPUT_DIR
from services.calendar import parse_calendar_events
from services.reports import create_workload_excel_report, format_workload_summary_text
from services.rules import evaluate_workload
from services.workload import aggregate, calculate_daily_metrics


# =============================================================================
# DATE UTILITIES
# =============================================================================


def get_monthly_date_range(month_str: str | None) -> tuple[date, date]:
    """
    Calculate date range for a month.

    Args:
        month_str: Optional month string (YYYY-MM). Uses the current month if None.

    Returns:
        Tuple of (first_of_month, last_of_month)
    """
    if month_str:
        year, month = map(int, month_str.split("-"))
        target_date = date(year, month, 1)
    else:
        target_date = date.today().replace(day=1)

    _, last_day = calendar.monthrange(target_date.year, target_date.month)
    return target_date, target_date.replace(day=last_day)


def resolve_date_range(month_str: str | None, start_str: str | None, end_str: str | None) -> tuple[date, date]:
    if start_str or end_str:
        if not (start_str and end_str):
            raise ValueError("--start and --end must be given together")
        start_date, end_date = date.fromisoformat(start_str), date.fromisoformat(end_str)
        if start_date > end_date:
            raise ValueError("--start must be on or before --end")
        return start_date, end_date
    return get_monthly_date_range(month_str)


def load_payloads(path: Path) -> list[dict]:
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data.get("items", [])
    return data


# =============================================================================
# MAIN
# =============================================================================


def main(
    events_path: Path,
    month_str: str | None = None,
    start_str: str | None = None,
    end_str: str | None = None,
    calendar_id: str = "primary",
    output_dir: Path | None = None,
) -> Path:
    """Main entry point for the workload report."""
    # 1. Date range
    start_date, end_date = resolve_date_range(month_str, start_str, end_str)
    print(f"Generating workload report for {start_date} to {end_date}")

    # 2. Parse and classify events
    payloads = load_payloads(events_path)
    events = parse_calendar_events(payloads, calendar_id)
    work_count = sum(1 for e in events if e.is_work_event)
    print(f"  Loaded {len(events)} events ({work_count} work) from {events_path}")

    # 3. Metrics and rules
    metrics = calculate_daily_metrics(start_date, end_date, events)
    totals = aggregate(events, start_date, end_date)
    risk = evaluate_workload(events, start_date, end_date, today=end_date)
    print(f"  Visits: {totals.total_visits}, hours: {totals.total_hours:.1f}, clients: {totals.unique_clients}")
    print(f"  Violations: {len(risk.violations)}, burnout risk: {risk.level.value} ({risk.score})")

    # 4. Excel report
    output_dir = output_dir or OUTPUT_DIR / "reports" / "workload"
    output_path = output_dir / f"workload-{start_date.isoformat()}-to-{end_date.isoformat()}.xlsx"
    create_workload_excel_report(start_date, end_date, metrics, events, risk, output_path)

    # 5. Summary
    print()
    print(format_workload_summary_text(start_date, end_date, metrics, totals, risk))
    print("\nDone!")

    return output_path


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate workload report from calendar events")
    parser.add_argument("--events", required=True, type=Path, help="JSON file of calendar events")
    parser.add_argument("--month", help="Target month (YYYY-MM). Defaults to current month.")
    parser.add_argument("--start", help="Range start (YYYY-MM-DD); use with --end")
    parser.add_argument("--end", help="Range end (YYYY-MM-DD); use with --start")
    parser.add_argument("--calendar-id", default="primary", help="Calendar id to stamp on events")
    parser.add_argument("--output-dir", type=Path, help="Directory for the .xlsx file")
    args = parser.parse_args()

    main(args.events, args.month, args.start, args.end, args.calendar_id, args.output_dir)
