"""Multi-event booking generation endpoint."""

from fastapi import APIRouter, Request

from api.dependencies import parse_events, start_request_log
from api.logging import track_request
from api.models.requests import ScheduleRequest
from api.models.responses import GeneratedEventOut, ScheduleResponse
from services.scheduling import detect_conflicts, generate_events

router = APIRouter(prefix="/v1")


@router.post("/schedule/generate", response_model=ScheduleResponse)
async def generate_schedule_endpoint(request: Request, body: ScheduleRequest):
    """
    Expand a booking into events and flag the ones that clash with the
    existing calendar. Nothing is written to any calendar.
    """
    with track_request(start_request_log(request), "Booking configuration is invalid") as request_log:
        generated = generate_events(body.to_domain(), body.template_registry())
        existing = parse_events(body.existing_payloads(), body.calendar_id, request_log)
        conflicts = detect_conflicts(existing, generated)

        for event in conflicts:
            request_log.details.append(("warning", f"Conflict: {event.title} at {event.start.isoformat()}"))

        return ScheduleResponse(
            events=[GeneratedEventOut.from_domain(e) for e in generated],
            conflicts=[GeneratedEventOut.from_domain(e) for e in conflicts],
        )
