"""Shared helpers for API routes."""

from fastapi import Request

from api.logging import RequestLog
from core.validation import validate_rules, validate_thresholds
from models.events import CalendarPayload, ClassifiedEvent
from models.workload import WorkloadRules, WorkloadThresholds
from services.calendar import parse_calendar_events


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def start_request_log(request: Request) -> RequestLog:
    return RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
    )


def parse_events(
    payloads: list[CalendarPayload], calendar_id: str, request_log: RequestLog
) -> list[ClassifiedEvent]:
    """Parse and classify request events, recording skipped ones as warnings."""
    events = parse_calendar_events(payloads, calendar_id)
    skipped = len(payloads) - len(events)
    if skipped:
        request_log.details.append(("warning", f"{skipped} event(s) skipped (cancelled or unparseable)"))
    request_log.events_processed = len(events)
    return events


def check_settings(
    rules: WorkloadRules | None = None, thresholds: WorkloadThresholds | None = None
):
    """
    Raises:
        ValueError: with one line per invalid setting
    """
    errors = []
    if rules is not None:
        errors.extend(validate_rules(rules))
    if thresholds is not None:
        errors.extend(validate_thresholds(thresholds))
    if errors:
        raise ValueError("\n".join(errors))
