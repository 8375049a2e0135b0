"""
Workload report generation: Excel workbook and plain-text summary.
"""

from collections import defaultdict
from datetime import date
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.classification import service_type_label
from core.config import (
    CLIENT_HEADERS,
    DAILY_HEADERS,
    DAY_OF_WEEK_HEADERS,
    SERVICE_HEADERS,
    VIOLATION_HEADERS,
    VISIT_HEADERS,
    WEEKLY_HEADERS,
)
from models.events import ClassifiedEvent
from models.workload import (
    DEFAULT_THRESHOLDS,
    BurnoutRisk,
    ClientStats,
    DailyMetric,
    DayOfWeekStats,
    PeriodMetrics,
    RuleViolation,
    ServiceBreakdown,
    WeeklyStats,
    WorkloadThresholds,
)
from services.analytics import (
    calculate_day_of_week_stats,
    calculate_service_breakdown,
    calculate_top_clients,
    calculate_weekly_stats,
)
from services.workload import filter_work_events, format_hours, starts_in


def format_date_display(d: date) -> str:
    """Format date as M/D/YYYY (platform-safe, no zero-padding)."""
    return f"{d.month}/{d.day}/{d.year}"


def format_date_short(d: date) -> str:
    """Format date as 'Mon D' (platform-safe, e.g., 'Nov 7')."""
    return f"{d.strftime('%b')} {d.day}"


def _write_headers(ws, headers: list[str]):
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)
        ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(header) + 2)


# =============================================================================
# EXCEL SHEETS
# =============================================================================


def write_daily_sheet(ws, metrics: list[DailyMetric]):
    """
    Daily Workload sheet, one row per day plus a totals row.

    Hours are rounded to two decimals; the totals row uses SUM formulas so
    edits in the sheet flow through.
    """
    _write_headers(ws, DAILY_HEADERS)

    for row_idx, metric in enumerate(metrics, start=2):
        row_data = [
            format_date_display(metric.date),
            metric.date.strftime("%a"),
            round(metric.work_minutes / 60, 2),
            round(metric.travel_minutes / 60, 2),
            round(metric.total_hours, 2),
            metric.event_count,
            metric.level.value,
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    if not metrics:
        return

    last_row = len(metrics) + 1
    total_row = last_row + 1
    ws.cell(row=total_row, column=1, value="Total").font = Font(bold=True)
    for col_idx in (3, 4, 5, 6):
        col = get_column_letter(col_idx)
        ws.cell(row=total_row, column=col_idx, value=f"=SUM({col}2:{col}{last_row})")


def write_visits_sheet(ws, events: list[ClassifiedEvent]):
    """Visits sheet: every work event in start order."""
    _write_headers(ws, VISIT_HEADERS)

    work_events = sorted(filter_work_events(events), key=lambda e: e.start)
    for row_idx, event in enumerate(work_events, start=2):
        service = service_type_label(event.service_info.type) if event.service_info else ""
        row_data = [
            format_date_display(event.start.date()),
            event.start.strftime("%H:%M"),
            event.end.strftime("%H:%M"),
            event.client_name or "",
            service,
            round(event.duration_minutes),
            "Yes" if event.is_overnight_event else "",
            event.title,
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def write_violations_sheet(ws, violations: list[RuleViolation]):
    _write_headers(ws, VIOLATION_HEADERS)

    for row_idx, violation in enumerate(violations, start=2):
        row_data = [
            format_date_display(violation.date) if violation.date else "",
            violation.type.value,
            violation.severity.value,
            violation.title,
            violation.description,
            round(violation.metric, 2),
            violation.threshold,
            violation.recommendation or "",
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def write_burnout_sheet(ws, risk: BurnoutRisk, start_date: date, end_date: date):
    """Burnout Risk sheet: label/value pairs followed by contributing factors."""
    rows = [
        ("Period", f"{format_date_display(start_date)} - {format_date_display(end_date)}"),
        ("Risk Level", risk.level.value),
        ("Score", risk.score),
        ("Violations", len(risk.violations)),
    ]
    for row_idx, (label, value) in enumerate(rows, start=1):
        ws.cell(row=row_idx, column=1, value=label).font = Font(bold=True)
        ws.cell(row=row_idx, column=2, value=value)

    factor_row = len(rows) + 2
    ws.cell(row=factor_row, column=1, value="Factors").font = Font(bold=True)
    for offset, factor in enumerate(risk.factors, start=1):
        ws.cell(row=factor_row + offset, column=1, value=factor)

    ws.column_dimensions["A"].width = 40
    ws.column_dimensions["B"].width = 24


def write_services_sheet(ws, breakdown: list[ServiceBreakdown]):
    _write_headers(ws, SERVICE_HEADERS)

    for row_idx, item in enumerate(breakdown, start=2):
        row_data = [item.label, item.count, round(item.minutes / 60, 2), round(item.percentage, 1)]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def write_clients_sheet(ws, clients: list[ClientStats]):
    _write_headers(ws, CLIENT_HEADERS)

    for row_idx, client in enumerate(clients, start=2):
        row_data = [client.name, client.visit_count, round(client.total_minutes / 60, 2)]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def write_weekly_sheet(ws, weeks: list[WeeklyStats]):
    _write_headers(ws, WEEKLY_HEADERS)

    for row_idx, week in enumerate(weeks, start=2):
        row_data = [
            format_date_display(week.week_start),
            format_date_display(week.week_end),
            round(week.total_hours, 2),
            week.event_count,
            week.level.value,
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def write_day_of_week_sheet(ws, days: list[DayOfWeekStats]):
    _write_headers(ws, DAY_OF_WEEK_HEADERS)

    for row_idx, day in enumerate(days, start=2):
        row_data = [day.day, round(day.average_minutes / 60, 2), round(day.average_events, 2)]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def build_workload_workbook(
    start_date: date,
    end_date: date,
    metrics: list[DailyMetric],
    events: list[ClassifiedEvent],
    risk: BurnoutRisk,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
) -> Workbook:
    """
    Build the workload workbook.

    Sheet 1: "Daily Workload" - hours and level per day
    Sheet 2: "Visits" - work events in start order
    Sheet 3: "Rule Violations" - everything the rules engine flagged
    Sheet 4: "Burnout Risk" - score, level and factors
    Sheet 5: "Services" - visits and hours per service type
    Sheet 6: "Clients" - top clients by visit count
    Sheet 7: "Weekly" - hours and level per calendar week
    Sheet 8: "Day of Week" - average hours and visits per weekday

    Sheets 5-8 only count work events that start in the period.
    """
    in_period = [e for e in events if starts_in(e, start_date, end_date)]
    wb = Workbook()

    ws_daily = wb.active
    ws_daily.title = "Daily Workload"
    write_daily_sheet(ws_daily, metrics)

    write_visits_sheet(wb.create_sheet(title="Visits"), events)
    write_violations_sheet(wb.create_sheet(title="Rule Violations"), risk.violations)
    write_burnout_sheet(wb.create_sheet(title="Burnout Risk"), risk, start_date, end_date)
    write_services_sheet(wb.create_sheet(title="Services"), calculate_service_breakdown(in_period))
    write_clients_sheet(wb.create_sheet(title="Clients"), calculate_top_clients(in_period))
    write_weekly_sheet(
        wb.create_sheet(title="Weekly"),
        calculate_weekly_stats(events, start_date, end_date, thresholds),
    )
    write_day_of_week_sheet(
        wb.create_sheet(title="Day of Week"),
        calculate_day_of_week_stats(events, start_date, end_date),
    )

    return wb


def create_workload_excel_report(
    start_date: date,
    end_date: date,
    metrics: list[DailyMetric],
    events: list[ClassifiedEvent],
    risk: BurnoutRisk,
    output_path: Path,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
):
    wb = build_workload_workbook(start_date, end_date, metrics, events, risk, thresholds)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    print(f"Saved Excel report to: {output_path}")


def workload_report_to_bytes(
    start_date: date,
    end_date: date,
    metrics: list[DailyMetric],
    events: list[ClassifiedEvent],
    risk: BurnoutRisk,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
) -> bytes:
    """Same workbook as create_workload_excel_report, kept in memory."""
    wb = build_workload_workbook(start_date, end_date, metrics, events, risk, thresholds)
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


# =============================================================================
# TEXT SUMMARY
# =============================================================================


def format_workload_summary_text(
    start_date: date,
    end_date: date,
    metrics: list[DailyMetric],
    totals: PeriodMetrics,
    risk: BurnoutRisk,
) -> str:
    """
    Format a workload period into a plain-text summary grouped by date.

    Visit and client counts come from `totals`; total time is the sum of the
    daily figures, so it includes travel and the overnight cap.
    """
    lines = [
        f"Workload Report - {format_date_short(start_date)} to {format_date_short(end_date)} {end_date.year}",
        "",
    ]

    if not metrics or not any(m.event_count for m in metrics):
        lines.append("No work events found for this period.")
        return "\n".join(lines)

    total_hours = sum(m.total_hours for m in metrics)
    busiest = max(metrics, key=lambda m: m.total_minutes)
    lines.append(f"Visits: {totals.total_visits} ({totals.unique_clients} clients)")
    lines.append(f"Total time: {format_hours(total_hours)}")
    lines.append(f"Busiest day: {format_date_short(busiest.date)} ({format_hours(busiest.total_hours)})")
    lines.append(f"Burnout risk: {risk.level.value} (score {risk.score})")
    lines.append("")

    violations_by_date: dict[date | None, list[RuleViolation]] = defaultdict(list)
    for violation in risk.violations:
        violations_by_date[violation.date].append(violation)

    if violations_by_date:
        lines.append("Rule Violations:")
        lines.append("")
        for day in sorted(violations_by_date, key=lambda d: d or date.min):
            lines.append(f"{format_date_short(day)}:" if day else "Undated:")
            for violation in violations_by_date[day]:
                lines.append(f"  - [{violation.severity.value}] {violation.title}: {violation.description}")
        lines.append("")
    else:
        lines.append("No rule violations found.")

    if risk.factors:
        lines.append(f"Contributing factors: {', '.join(risk.factors)}")

    return "\n".join(lines)
