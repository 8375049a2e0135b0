"""
Booking configuration and settings validation.

Validators return a list of human-readable errors (empty = valid) so callers
can show every problem at once.
"""

import re
from datetime import time

from models.scheduling import BookingType, MultiEventConfig, Template, VisitSlot
from models.workload import WorkloadRules, WorkloadThresholds

TIME_OF_DAY = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_of_day(value: str) -> time:
    """Parse 'HH:MM' (24h). Raises ValueError on anything else."""
    match = TIME_OF_DAY.match(value.strip()) if value else None
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(hours, minutes)


def _check_time(value: str, label: str, errors: list[str]):
    try:
        parse_time_of_day(value)
    except ValueError:
        errors.append(f"{label}: invalid time '{value}' (expected HH:MM)")


def _check_slots(slots: list[VisitSlot], label: str, errors: list[str]):
    for idx, slot in enumerate(slots, start=1):
        _check_time(slot.time, f"{label} {idx}", errors)
        if slot.duration_minutes < 0:
            errors.append(f"{label} {idx}: duration cannot be negative")


def _template_ids(config: MultiEventConfig) -> list[str]:
    ids = [slot.template_id for slot in config.visits]
    ids += [slot.template_id for slot in config.weekend_visits or []]
    if config.overnight_config:
        ids.append(config.overnight_config.template_id)
    if config.dropin_config:
        ids.append(config.dropin_config.template_id)
    return ids


def validate_multi_event_config(
    config: MultiEventConfig, templates: list[Template] | None = None
) -> list[str]:
    """
    Validate a booking configuration.

    Checks:
    1. Client name is present
    2. Start date is not after end date
    3. Daily visits have at least one slot; overnight stays have an overnight config
    4. Times are HH:MM and durations are not negative
    5. Template ids resolve (only when a template registry is given)
    """
    errors = []

    # Check 1: Client name
    if not config.client_name or not config.client_name.strip():
        errors.append("Client name is required")

    # Check 2: Date order
    if not config.start_date or not config.end_date:
        errors.append("Start and end dates are required")
    elif config.start_date > config.end_date:
        errors.append("Start date must be on or before end date")

    # Check 3: Something to generate
    if config.booking_type == BookingType.DAILY_VISITS:
        if not config.visits:
            errors.append("At least one visit slot is required")
    elif config.booking_type == BookingType.OVERNIGHT_STAY:
        if not config.overnight_config:
            errors.append("Overnight configuration is required for overnight stay")

    # Check 4: Times and durations
    if config.booking_type == BookingType.DAILY_VISITS:
        _check_slots(config.visits, "Visit", errors)
        _check_slots(config.weekend_visits or [], "Weekend visit", errors)
    if config.overnight_config:
        _check_time(config.overnight_config.arrival_time, "Overnight arrival", errors)
        _check_time(config.overnight_config.departure_time, "Overnight departure", errors)
    if config.dropin_config:
        _check_time(config.dropin_config.time, "Drop-in", errors)
        if config.dropin_config.duration_minutes < 0:
            errors.append("Drop-in: duration cannot be negative")

    # Check 5: Template resolution
    if templates is not None:
        known = {template.id for template in templates}
        missing = sorted({tid for tid in _template_ids(config) if tid not in known})
        for template_id in missing:
            errors.append(f"Unknown template '{template_id}'")

    return errors


def validate_thresholds(thresholds: WorkloadThresholds) -> list[str]:
    """Each period must satisfy 0 <= comfortable < busy < high."""
    errors = []
    for period in ("daily", "weekly", "monthly"):
        config = thresholds.for_period(period)
        if config.comfortable < 0:
            errors.append(f"{period} thresholds cannot be negative")
        if not config.comfortable < config.busy < config.high:
            errors.append(
                f"{period} thresholds must satisfy comfortable < busy < high "
                f"(got {config.comfortable}, {config.busy}, {config.high})"
            )
    return errors


def validate_rules(rules: WorkloadRules) -> list[str]:
    errors = []
    if rules.max_visits_per_day < 0:
        errors.append("max_visits_per_day cannot be negative")
    if rules.max_hours_per_day < 0:
        errors.append("max_hours_per_day cannot be negative")
    if rules.max_hours_per_week < 0:
        errors.append("max_hours_per_week cannot be negative")
    if rules.max_consecutive_busy_days < 0:
        errors.append("max_consecutive_busy_days cannot be negative")
    return errors
