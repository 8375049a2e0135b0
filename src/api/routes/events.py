"""Event classification endpoint."""

from fastapi import APIRouter, Request

from api.dependencies import parse_events, start_request_log
from api.logging import track_request
from api.models.requests import EventsRequest
from api.models.responses import ClassifiedEventOut, ClassifyResponse

router = APIRouter(prefix="/v1")


@router.post("/events/classify", response_model=ClassifyResponse)
async def classify_events_endpoint(request: Request, body: EventsRequest):
    """
    Classify calendar events as work or personal.

    Work events also get a client name, service type and duration. Cancelled
    and unparseable events are dropped.
    """
    with track_request(start_request_log(request), "Event classification failed") as request_log:
        events = parse_events(body.payloads(), body.calendar_id, request_log)

        return ClassifyResponse(
            events=[ClassifiedEventOut.from_domain(e) for e in events],
            work_event_count=sum(1 for e in events if e.is_work_event),
        )
