"""
Pytest configuration and shared fixtures.
"""

import itertools
import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Pin calendar settings before config is imported
os.environ["LOCAL_TIMEZONE"] = "America/New_York"
os.environ["WEEK_STARTS_ON"] = "6"

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.classification import classify_event  # noqa: E402
from models.events import ClassifiedEvent, RawEvent, ServiceInfo, ServiceType  # noqa: E402

_ids = itertools.count(1)


def raw_event(title: str, start: datetime, end: datetime, **kwargs) -> RawEvent:
    return RawEvent(
        id=kwargs.pop("id", f"evt-{next(_ids)}"),
        calendar_id=kwargs.pop("calendar_id", "primary"),
        title=title,
        start=start,
        end=end,
        **kwargs,
    )


def classified(title: str, start: datetime, end: datetime, **kwargs) -> ClassifiedEvent:
    """Run a raw event through the real classifier."""
    return classify_event(raw_event(title, start, end, **kwargs))


def work_event(
    start: datetime,
    minutes: int,
    client: str = "Bella",
    overnight: bool = False,
    location: str | None = None,
) -> ClassifiedEvent:
    """Work event with derived fields set directly, bypassing title parsing."""
    service_type = ServiceType.OVERNIGHT if overnight else ServiceType.DROP_IN
    return ClassifiedEvent(
        id=f"evt-{next(_ids)}",
        calendar_id="primary",
        title=f"{client} - {minutes}",
        start=start,
        end=start + timedelta(minutes=minutes),
        location=location,
        is_work_event=True,
        is_overnight_event=overnight,
        client_name=client,
        service_info=ServiceInfo(service_type, minutes, client),
    )


def personal_event(start: datetime, minutes: int, title: str = "Dentist appointment") -> ClassifiedEvent:
    return ClassifiedEvent(
        id=f"evt-{next(_ids)}",
        calendar_id="primary",
        title=title,
        start=start,
        end=start + timedelta(minutes=minutes),
    )


@pytest.fixture
def sample_payload():
    """Timed calendar event in Google Calendar JSON shape."""
    return {
        "id": "abc123",
        "summary": "Bella & Max - 30",
        "location": "12 Oak St",
        "status": "confirmed",
        "start": {"dateTime": "2025-11-03T09:00:00-05:00", "timeZone": "America/New_York"},
        "end": {"dateTime": "2025-11-03T09:30:00-05:00", "timeZone": "America/New_York"},
    }


@pytest.fixture
def sample_payloads(sample_payload):
    """Work, personal, all-day and cancelled events."""
    return [
        sample_payload,
        {
            **sample_payload,
            "id": "def456",
            "summary": "Dentist appointment",
            "location": None,
            "start": {"dateTime": "2025-11-03T13:00:00-05:00"},
            "end": {"dateTime": "2025-11-03T14:00:00-05:00"},
        },
        {
            "id": "ghi789",
            "summary": "Luna - HS",
            "start": {"date": "2025-11-07"},
            "end": {"date": "2025-11-09"},
        },
        {**sample_payload, "id": "cancel1", "status": "cancelled"},
    ]
