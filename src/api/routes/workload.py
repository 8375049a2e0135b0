"""Workload metrics, rules evaluation and report endpoints."""

import asyncio
from datetime import date

from fastapi import APIRouter, Request
from fastapi.responses import Response

from api.dependencies import check_settings, parse_events, start_request_log
from api.logging import track_request
from api.models.requests import (
    CheckRequest,
    EvaluateRequest,
    MetricsRequest,
    ReportRequest,
)
from api.models.responses import (
    BurnoutRiskResponse,
    CheckResponse,
    DailyMetricOut,
    MetricsResponse,
    RuleViolationOut,
)
from core.classification import classify_event
from core.config import DEFAULT_TRAVEL_MINUTES_PER_LEG, INCLUDE_TRAVEL_TIME
from models.events import ClassifiedEvent
from models.workload import WorkloadRules, WorkloadThresholds
from services.calendar import parse_raw_event
from services.reports import workload_report_to_bytes
from services.rules import evaluate_workload, would_violate_rules
from services.workload import aggregate, calculate_daily_metrics, get_workload_level

router = APIRouter(prefix="/v1")


@router.post("/workload/metrics", response_model=MetricsResponse)
async def workload_metrics_endpoint(request: Request, body: MetricsRequest):
    """Daily metrics and period totals for [start_date, end_date]."""
    with track_request(start_request_log(request), "Invalid workload settings") as request_log:
        thresholds = body.thresholds.to_domain()
        check_settings(thresholds=thresholds)

        events = parse_events(body.payloads(), body.calendar_id, request_log)
        include_travel = INCLUDE_TRAVEL_TIME if body.include_travel_time is None else body.include_travel_time
        per_leg = body.travel_minutes_per_leg
        if per_leg is None:
            per_leg = DEFAULT_TRAVEL_MINUTES_PER_LEG

        daily = calculate_daily_metrics(
            body.start_date, body.end_date, events, thresholds, include_travel, per_leg
        )
        totals = aggregate(events, body.start_date, body.end_date)

        return MetricsResponse(
            start_date=body.start_date,
            end_date=body.end_date,
            total_visits=totals.total_visits,
            total_hours=round(totals.total_hours, 2),
            unique_clients=totals.unique_clients,
            level=get_workload_level(totals.total_hours, body.period, thresholds).value,
            daily=[DailyMetricOut.from_domain(m) for m in daily],
        )


@router.post("/workload/evaluate", response_model=BurnoutRiskResponse)
async def evaluate_workload_endpoint(request: Request, body: EvaluateRequest):
    """Run every workload rule and score burnout risk."""
    with track_request(start_request_log(request), "Invalid workload settings") as request_log:
        rules = body.rules.to_domain()
        thresholds = body.thresholds.to_domain()
        check_settings(rules, thresholds)

        events = parse_events(body.payloads(), body.calendar_id, request_log)
        risk = evaluate_workload(events, body.start_date, body.end_date, rules, thresholds, body.today)
        request_log.violations_count = len(risk.violations)

        return BurnoutRiskResponse.from_domain(risk)


@router.post("/workload/check", response_model=CheckResponse)
async def check_booking_endpoint(request: Request, body: CheckRequest):
    """
    Check whether booking a candidate event would break a day-level rule.

    Every day the candidate touches is checked with the candidate included.
    """
    with track_request(start_request_log(request), "Invalid booking check") as request_log:
        rules = body.rules.to_domain()
        check_settings(rules=rules)

        events = parse_events(body.payloads(), body.calendar_id, request_log)
        candidate = classify_event(parse_raw_event(body.candidate.to_payload(), body.calendar_id))

        violations = would_violate_rules(events, candidate, rules)
        request_log.violations_count = len(violations)

        return CheckResponse(
            would_violate=bool(violations),
            violations=[RuleViolationOut.from_domain(v) for v in violations],
        )


def _build_report(
    events: list[ClassifiedEvent],
    start_date: date,
    end_date: date,
    rules: WorkloadRules,
    thresholds: WorkloadThresholds,
    include_travel_time: bool,
    today: date | None,
) -> tuple[bytes, int]:
    """Evaluate and render the workbook; runs in a worker thread."""
    metrics = calculate_daily_metrics(start_date, end_date, events, thresholds, include_travel_time)
    risk = evaluate_workload(events, start_date, end_date, rules, thresholds, today)
    excel_bytes = workload_report_to_bytes(start_date, end_date, metrics, events, risk, thresholds)
    return excel_bytes, len(risk.violations)


@router.post("/workload/report")
async def workload_report_endpoint(request: Request, body: ReportRequest):
    """Return the workload report as an Excel workbook."""
    with track_request(start_request_log(request), "Invalid workload settings") as request_log:
        rules = body.rules.to_domain()
        thresholds = body.thresholds.to_domain()
        check_settings(rules, thresholds)

        events = parse_events(body.payloads(), body.calendar_id, request_log)
        include_travel = INCLUDE_TRAVEL_TIME if body.include_travel_time is None else body.include_travel_time

        excel_bytes, violation_count = await asyncio.to_thread(
            _build_report,
            events,
            body.start_date,
            body.end_date,
            rules,
            thresholds,
            include_travel,
            body.today,
        )
        request_log.violations_count = violation_count

        filename = f"workload-{body.start_date.isoformat()}-to-{body.end_date.isoformat()}.xlsx"
        return Response(
            content=excel_bytes,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
