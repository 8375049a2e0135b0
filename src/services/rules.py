"""
Workload rules engine and burnout risk scoring.

Each check is independent and returns zero or more violations. Nothing is
cached: every call recomputes from the events it is given.

The burnout score is an advisory heuristic for planning, not a medical or HR
assessment.
"""

import logging
from datetime import date

from core.config import (
    BURNOUT_LEVEL_CUTOFFS,
    BURNOUT_MAX_SCORE,
    BURNOUT_POINTS_CRITICAL,
    BURNOUT_POINTS_STREAK,
    BURNOUT_POINTS_WARNING,
    BURNOUT_POINTS_WEEKLY_BUSY,
    BURNOUT_POINTS_WEEKLY_HIGH,
    DAILY_CRITICAL_MARGIN,
    STREAK_CRITICAL_MARGIN_DAYS,
    WEEK_STARTS_ON,
    WEEKEND_WORK_HOURS_LIMIT,
    WEEKLY_CRITICAL_MARGIN_HOURS,
)
from core.intervals import days_spanned, each_day
from models.events import ClassifiedEvent
from models.workload import (
    DEFAULT_RULES,
    DEFAULT_THRESHOLDS,
    BurnoutLevel,
    BurnoutRisk,
    RuleSeverity,
    RuleViolation,
    RuleViolationType,
    WorkloadRules,
    WorkloadThresholds,
)
from services.workload import (
    events_for_day,
    filter_work_events,
    get_period_range,
    get_workload_level,
    work_hours_in_range,
    work_minutes_for_day,
)

logger = logging.getLogger(__name__)


def _severity(metric: float, limit: float, margin: float) -> RuleSeverity:
    return RuleSeverity.CRITICAL if metric > limit + margin else RuleSeverity.WARNING


# =============================================================================
# DAY-LEVEL CHECKS
# =============================================================================


def check_day(
    events: list[ClassifiedEvent], day: date, rules: WorkloadRules = DEFAULT_RULES
) -> list[RuleViolation]:
    """Visit-count and hour limits for a single day."""
    violations = []
    day_events = filter_work_events(events_for_day(events, day))

    visits = len(day_events)
    if visits > rules.max_visits_per_day:
        violations.append(
            RuleViolation(
                type=RuleViolationType.MAX_VISITS_DAY,
                severity=_severity(visits, rules.max_visits_per_day, DAILY_CRITICAL_MARGIN),
                title="Too Many Visits",
                description=f"{visits} visits scheduled (max: {rules.max_visits_per_day})",
                metric=visits,
                threshold=rules.max_visits_per_day,
                date=day,
                recommendation="Consider rescheduling some visits to another day.",
            )
        )

    hours = work_minutes_for_day(day_events, day) / 60
    if hours > rules.max_hours_per_day:
        violations.append(
            RuleViolation(
                type=RuleViolationType.MAX_HOURS_DAY,
                severity=_severity(hours, rules.max_hours_per_day, DAILY_CRITICAL_MARGIN),
                title="Long Day Ahead",
                description=f"{hours:.1f} hours scheduled (max: {rules.max_hours_per_day:g})",
                metric=hours,
                threshold=rules.max_hours_per_day,
                date=day,
                recommendation="Plan for extra rest before or after this busy day.",
            )
        )

    return violations


def check_daily_limits(
    events: list[ClassifiedEvent], start_date: date, end_date: date, rules: WorkloadRules
) -> list[RuleViolation]:
    violations = []
    for day in each_day(start_date, end_date):
        violations.extend(check_day(events, day, rules))
    return violations


def would_violate_rules(
    existing: list[ClassifiedEvent],
    candidate: ClassifiedEvent,
    rules: WorkloadRules = DEFAULT_RULES,
) -> list[RuleViolation]:
    """Day-level checks for every day the candidate touches, as if it were booked."""
    combined = [*existing, candidate]
    violations = []
    for day in days_spanned(candidate):
        violations.extend(check_day(combined, day, rules))
    return violations


# =============================================================================
# WEEK AND STREAK CHECKS
# =============================================================================


def check_weekly_limits(
    events: list[ClassifiedEvent], week_start: date, week_end: date, rules: WorkloadRules
) -> list[RuleViolation]:
    weekly_hours = work_hours_in_range(events, week_start, week_end)

    if weekly_hours <= rules.max_hours_per_week:
        return []

    return [
        RuleViolation(
            type=RuleViolationType.MAX_HOURS_WEEK,
            severity=_severity(weekly_hours, rules.max_hours_per_week, WEEKLY_CRITICAL_MARGIN_HOURS),
            title="High Load Week",
            description=f"{weekly_hours:.1f} hours this week (max: {rules.max_hours_per_week:g})",
            metric=weekly_hours,
            threshold=rules.max_hours_per_week,
            date=week_start,
            recommendation="Consider blocking off some time for yourself this week.",
        )
    ]


def _streak_violation(length: int, streak_start: date, rules: WorkloadRules) -> RuleViolation:
    return RuleViolation(
        type=RuleViolationType.CONSECUTIVE_BUSY_DAYS,
        severity=_severity(length, rules.max_consecutive_busy_days, STREAK_CRITICAL_MARGIN_DAYS),
        title="Long Busy Streak",
        description=f"{length} busy days in a row",
        metric=length,
        threshold=rules.max_consecutive_busy_days,
        date=streak_start,
        recommendation="Schedule a lighter day or day off to recover.",
    )


def check_consecutive_busy_days(
    events: list[ClassifiedEvent],
    start_date: date,
    end_date: date,
    rules: WorkloadRules,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
) -> list[RuleViolation]:
    """Flag runs of busy-or-worse days longer than the allowed streak."""
    violations = []
    streak = 0
    streak_start = None

    for day in each_day(start_date, end_date):
        hours = work_minutes_for_day(events, day) / 60
        if get_workload_level(hours, "daily", thresholds).is_busy:
            if streak == 0:
                streak_start = day
            streak += 1
            continue

        if streak > rules.max_consecutive_busy_days:
            violations.append(_streak_violation(streak, streak_start, rules))
        streak = 0
        streak_start = None

    # Streak still open at the end of the range
    if streak > rules.max_consecutive_busy_days:
        violations.append(_streak_violation(streak, streak_start, rules))

    return violations


def check_weekend_work(
    events: list[ClassifiedEvent], start_date: date, end_date: date
) -> list[RuleViolation]:
    violations = []
    for day in each_day(start_date, end_date):
        if day.weekday() < 5:
            continue

        hours = work_minutes_for_day(events, day) / 60
        if hours > WEEKEND_WORK_HOURS_LIMIT:
            violations.append(
                RuleViolation(
                    type=RuleViolationType.WEEKEND_OVERWORK,
                    severity=RuleSeverity.INFO,
                    title="Weekend Work",
                    description=f"{hours:.1f} hours scheduled on {day.strftime('%A')}",
                    metric=hours,
                    threshold=WEEKEND_WORK_HOURS_LIMIT,
                    date=day,
                    recommendation="Balance work with rest time on weekends when possible.",
                )
            )
    return violations


# =============================================================================
# EVALUATION
# =============================================================================


def evaluate_rules(
    events: list[ClassifiedEvent],
    start_date: date,
    end_date: date,
    rules: WorkloadRules = DEFAULT_RULES,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
    today: date | None = None,
    week_starts_on: int = WEEK_STARTS_ON,
) -> list[RuleViolation]:
    """
    Run every rule over [start_date, end_date].

    The weekly limit is checked for the calendar week containing `today`
    (defaults to the current date). Only work events are considered.
    """
    work_events = filter_work_events(events)
    week_start, week_end = get_period_range("weekly", today, week_starts_on)

    violations = []
    violations.extend(check_daily_limits(work_events, start_date, end_date, rules))
    violations.extend(check_weekly_limits(work_events, week_start, week_end, rules))
    violations.extend(check_consecutive_busy_days(work_events, start_date, end_date, rules, thresholds))
    if rules.warn_on_weekend_work:
        violations.extend(check_weekend_work(work_events, start_date, end_date))

    logger.debug(
        "Evaluated %d work events from %s to %s: %d violations",
        len(work_events), start_date, end_date, len(violations),
    )
    return violations


def burnout_level(score: int) -> BurnoutLevel:
    for cutoff, level in BURNOUT_LEVEL_CUTOFFS:
        if score >= cutoff:
            return BurnoutLevel(level)
    return BurnoutLevel.LOW


def assess_burnout_risk(
    violations: list[RuleViolation],
    weekly_hours: float,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
) -> BurnoutRisk:
    """
    Additive 0-100 score.

    +20 per critical violation, +10 per warning, +25/+15 when weekly hours
    pass the weekly high/busy threshold, +15 for any busy streak.
    """
    factors = []
    score = 0

    critical_count = sum(1 for v in violations if v.severity == RuleSeverity.CRITICAL)
    warning_count = sum(1 for v in violations if v.severity == RuleSeverity.WARNING)

    score += critical_count * BURNOUT_POINTS_CRITICAL
    score += warning_count * BURNOUT_POINTS_WARNING

    if critical_count > 0:
        factors.append("Multiple critical workload violations")
    if warning_count > 2:
        factors.append("Several workload warnings")

    weekly = thresholds.weekly
    if weekly_hours > weekly.high:
        score += BURNOUT_POINTS_WEEKLY_HIGH
        factors.append("Weekly hours exceed high threshold")
    elif weekly_hours > weekly.busy:
        score += BURNOUT_POINTS_WEEKLY_BUSY
        factors.append("Busy weekly schedule")

    if any(v.type == RuleViolationType.CONSECUTIVE_BUSY_DAYS for v in violations):
        score += BURNOUT_POINTS_STREAK
        factors.append("Extended periods without rest")

    score = min(score, BURNOUT_MAX_SCORE)

    return BurnoutRisk(
        level=burnout_level(score),
        score=score,
        factors=factors,
        violations=list(violations),
    )


def evaluate_workload(
    events: list[ClassifiedEvent],
    start_date: date,
    end_date: date,
    rules: WorkloadRules = DEFAULT_RULES,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
    today: date | None = None,
    week_starts_on: int = WEEK_STARTS_ON,
) -> BurnoutRisk:
    """Evaluate rules and score burnout risk in one pass."""
    violations = evaluate_rules(events, start_date, end_date, rules, thresholds, today, week_starts_on)

    week_start, week_end = get_period_range("weekly", today, week_starts_on)
    weekly_hours = work_hours_in_range(events, week_start, week_end)

    return assess_burnout_risk(violations, weekly_hours, thresholds)
