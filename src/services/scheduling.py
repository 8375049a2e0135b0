"""
Multi-event generation for multi-day bookings, plus conflict detection.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any

from core.config import DEFAULT_SERVICE_DURATION_MINUTES
from core.intervals import ONE_DAY, each_day, overlaps
from core.validation import parse_time_of_day, validate_multi_event_config
from models.scheduling import (
    BookingType,
    DropinConfig,
    GeneratedEvent,
    MultiEventConfig,
    OvernightConfig,
    Template,
    VisitSlot,
)

logger = logging.getLogger(__name__)


def combine_date_time(day: date, time_str: str) -> datetime:
    return datetime.combine(day, parse_time_of_day(time_str))


def build_title(template: Template, client_name: str) -> str:
    return f"{template.name} - {client_name.strip()}"


def visit_slots_for_date(config: MultiEventConfig, day: date) -> list[VisitSlot]:
    """Weekend days use the weekend slots when any are configured."""
    if day.weekday() >= 5 and config.weekend_visits:
        return config.weekend_visits
    return config.visits


def _build_visit(
    day: date, slot: VisitSlot | DropinConfig, template: Template, client_name: str
) -> GeneratedEvent:
    start = combine_date_time(day, slot.time)
    duration = slot.duration_minutes or template.duration_minutes or DEFAULT_SERVICE_DURATION_MINUTES
    return GeneratedEvent(
        title=build_title(template, client_name),
        start=start,
        end=start + timedelta(minutes=duration),
        template_id=template.id,
    )


def _build_overnight(
    config: MultiEventConfig, overnight: OvernightConfig, template: Template
) -> GeneratedEvent:
    start = combine_date_time(config.start_date, overnight.arrival_time)
    end = combine_date_time(config.end_date, overnight.departure_time)
    if end <= start:
        # Single-night stay entered with the same start and end date
        end += ONE_DAY
    return GeneratedEvent(
        title=build_title(template, config.client_name),
        start=start,
        end=end,
        template_id=template.id,
    )


def generate_events(config: MultiEventConfig, templates: list[Template]) -> list[GeneratedEvent]:
    """
    Expand a booking configuration into individual events.

    Raises:
        ValueError: if the configuration has validation errors (one per line)
    """
    errors = validate_multi_event_config(config, templates)
    if errors:
        raise ValueError("\n".join(errors))

    registry = {template.id: template for template in templates}
    events = []

    if config.booking_type == BookingType.OVERNIGHT_STAY:
        overnight = config.overnight_config
        events.append(_build_overnight(config, overnight, registry[overnight.template_id]))

        if config.dropin_config:
            dropin_template = registry[config.dropin_config.template_id]
            for day in each_day(config.start_date, config.end_date):
                events.append(_build_visit(day, config.dropin_config, dropin_template, config.client_name))
    else:
        for day in each_day(config.start_date, config.end_date):
            for slot in visit_slots_for_date(config, day):
                events.append(_build_visit(day, slot, registry[slot.template_id], config.client_name))

    logger.info(
        "Generated %d events for %s (%s, %s to %s)",
        len(events), config.client_name, config.booking_type.value, config.start_date, config.end_date,
    )
    return events


def detect_conflicts(existing_events: list[Any], generated: list[GeneratedEvent]) -> list[GeneratedEvent]:
    """
    Generated events that overlap at least one existing event.

    Compares every pair, O(n*m). Fine for a booking dialog; not meant for
    bulk imports.
    """
    return [
        gen
        for gen in generated
        if any(overlaps(existing.start, existing.end, gen.start, gen.end) for existing in existing_events)
    ]
