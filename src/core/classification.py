"""
Event classification: work vs. personal, client names and service info.

Everything here is a pure function of an event's title and span. Personal
patterns are checked before work patterns and always win, so time off is
never counted as billable work.
"""

import re
from dataclasses import fields
from datetime import datetime

from core.config import (
    DEFAULT_SERVICE_DURATION_MINUTES,
    HOUSESIT_DURATION_MINUTES,
    OVERNIGHT_DURATION_MINUTES,
    OVERNIGHT_MIN_HOURS,
)
from models.events import ClassifiedEvent, RawEvent, ServiceInfo, ServiceType

# =============================================================================
# PATTERNS
# =============================================================================

# Uppercase abbreviations (MG, HS, ON, NT) are matched case-sensitively;
# "on" or "hs" in ordinary text is not a service marker.
DURATION_TOKEN = re.compile(r"\b(15|20|30|45|60)\b")
MEET_GREET = re.compile(r"\b((?-i:MG)|M&G|Meet\s*&?\s*Greet)\b", re.IGNORECASE)
HOUSESIT = re.compile(r"\b((?-i:HS)|Housesit|House\s*sit)\b", re.IGNORECASE)
OVERNIGHT = re.compile(r"\b((?-i:ON)|Overnight|Over\s*night)\b", re.IGNORECASE)
NAIL_TRIM = re.compile(r"\b(nail\s*trim|(?-i:NT))\b", re.IGNORECASE)
WALK = re.compile(r"\b(walk|walking)\b", re.IGNORECASE)
DROP_IN = re.compile(r"\b(drop[\s-]?in|visit)\b", re.IGNORECASE)
LEADING_NAME = re.compile(r"^([A-Za-z]+(?:\s*(?:&|and|,)\s*[A-Za-z]+)*)\s*[-–—]\s*", re.IGNORECASE)

PERSONAL_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("admin", re.compile(r"\b(admin|administration|administrative|paperwork|bookkeeping|billing)\b", re.IGNORECASE)),
    ("off_marker", re.compile(r"^\s*✨\s*off\s*✨", re.IGNORECASE)),
    ("day_off", re.compile(r"\b(day\s*off|off\s*day|no\s*work)\b", re.IGNORECASE)),
    ("medical", re.compile(r"\b(doctor|dr\.|dentist|medical|appointment|appt)", re.IGNORECASE)),
    ("personal", re.compile(r"\b(personal|private|family)\b", re.IGNORECASE)),
    ("blocked", re.compile(r"\b(blocked|busy|unavailable|break)\b", re.IGNORECASE)),
    ("holiday", re.compile(r"\b(holiday|vacation|pto|time\s*off)\b", re.IGNORECASE)),
    ("meals", re.compile(r"\b(lunch|dinner|breakfast|meal)\b", re.IGNORECASE)),
    ("travel", re.compile(r"\b(flight|airport|travel(?!.*time))\b", re.IGNORECASE)),
    ("entertainment", re.compile(r"\b(movie|concert|show|game|party)\b", re.IGNORECASE)),
    ("self_care", re.compile(r"\b(me time|self care|gym|workout|exercise)\b", re.IGNORECASE)),
)

WORK_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("duration", DURATION_TOKEN),
    ("meet_greet", MEET_GREET),
    ("housesit", HOUSESIT),
    ("overnight", OVERNIGHT),
    ("nail_trim", NAIL_TRIM),
    ("walk", WALK),
    ("drop_in", DROP_IN),
    ("leading_name", LEADING_NAME),
)

NAME_SEPARATORS = (" - ", " – ", " — ", " | ", " @ ")

# Checked in order; first match sets the service type
SERVICE_TYPE_PATTERNS: tuple[tuple[ServiceType, re.Pattern], ...] = (
    (ServiceType.MEET_GREET, MEET_GREET),
    (ServiceType.HOUSESIT, HOUSESIT),
    (ServiceType.OVERNIGHT, OVERNIGHT),
    (ServiceType.NAIL_TRIM, NAIL_TRIM),
    (ServiceType.WALK, WALK),
    (ServiceType.DROP_IN, DROP_IN),
)

DEFAULT_DURATIONS = {
    ServiceType.MEET_GREET: 30,
    ServiceType.HOUSESIT: HOUSESIT_DURATION_MINUTES,
    ServiceType.OVERNIGHT: OVERNIGHT_DURATION_MINUTES,
    ServiceType.NAIL_TRIM: 15,
    ServiceType.WALK: 30,
    ServiceType.DROP_IN: 30,
    ServiceType.OTHER: DEFAULT_SERVICE_DURATION_MINUTES,
}

FIXED_DURATION_TYPES = {ServiceType.HOUSESIT, ServiceType.OVERNIGHT}

SERVICE_TYPE_LABELS = {
    ServiceType.DROP_IN: "Drop-In Visit",
    ServiceType.WALK: "Walk",
    ServiceType.OVERNIGHT: "Overnight",
    ServiceType.HOUSESIT: "Housesit",
    ServiceType.MEET_GREET: "Meet & Greet",
    ServiceType.NAIL_TRIM: "Nail Trim",
    ServiceType.OTHER: "Other",
}


# =============================================================================
# CLASSIFICATION
# =============================================================================


def personal_pattern_name(title: str) -> str | None:
    """Name of the first personal pattern the title matches, if any."""
    for name, pattern in PERSONAL_PATTERNS:
        if pattern.search(title):
            return name
    return None


def is_definitely_personal(title: str) -> bool:
    return personal_pattern_name(title) is not None


def matches_work_pattern(title: str) -> bool:
    return any(pattern.search(title) for _, pattern in WORK_PATTERNS)


def is_work_event(title: str | None) -> bool:
    """Decide whether a title is a pet-sitting appointment."""
    if not title or not title.strip():
        return False

    if is_definitely_personal(title):
        return False

    return matches_work_pattern(title)


def is_overnight_event(title: str, start: datetime, end: datetime) -> bool:
    """Housesit/overnight keyword, or >= 8 hours crossing a day boundary."""
    if HOUSESIT.search(title) or OVERNIGHT.search(title):
        return True

    duration_hours = (end - start).total_seconds() / 3600
    return duration_hours >= OVERNIGHT_MIN_HOURS and start.date() != end.date()


def extract_client_name(title: str) -> str:
    """
    Pull the client/pet name out of a title.

    "Bella & Max - 30" -> "Bella & Max"; otherwise the text before the first
    separator; otherwise the whole title.
    """
    match = LEADING_NAME.match(title)
    if match:
        return match.group(1).strip()

    for separator in NAME_SEPARATORS:
        idx = title.find(separator)
        if idx > 0:
            return title[:idx].strip()

    return title.strip()


def extract_service_info(title: str) -> ServiceInfo:
    duration_match = DURATION_TOKEN.search(title)

    service_type = ServiceType.OTHER
    for candidate, pattern in SERVICE_TYPE_PATTERNS:
        if pattern.search(title):
            service_type = candidate
            break
    else:
        if duration_match:
            # A bare duration is how most drop-ins are written
            service_type = ServiceType.DROP_IN

    duration = DEFAULT_DURATIONS[service_type]
    if duration_match and service_type not in FIXED_DURATION_TYPES:
        duration = int(duration_match.group(1))

    return ServiceInfo(
        type=service_type,
        duration_minutes=duration,
        pet_name=extract_client_name(title),
    )


def classify_event(raw: RawEvent) -> ClassifiedEvent:
    """Derive work/overnight/client/service fields from a raw event."""
    base = {f.name: getattr(raw, f.name) for f in fields(RawEvent)}
    work = is_work_event(raw.title)

    if not work:
        return ClassifiedEvent(**base)

    return ClassifiedEvent(
        **base,
        is_work_event=True,
        is_overnight_event=is_overnight_event(raw.title, raw.start, raw.end),
        client_name=extract_client_name(raw.title),
        service_info=extract_service_info(raw.title),
    )


def classify_events(events: list[RawEvent]) -> list[ClassifiedEvent]:
    return [classify_event(event) for event in events]


def service_type_label(service_type: ServiceType) -> str:
    return SERVICE_TYPE_LABELS.get(service_type, "Other")


def overnight_nights(event: ClassifiedEvent) -> int:
    """Nights covered by an overnight event; at least 1, 0 if not overnight."""
    if not event.is_overnight_event:
        return 0
    return max(1, (event.end.date() - event.start.date()).days)
