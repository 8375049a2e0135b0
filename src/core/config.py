"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("SITTER_DB_PATH", PROJECT_ROOT / "data" / "db" / "sitter-workload.db"))
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

# Aware timestamps from the calendar provider are converted to this zone and
# made naive; the engine works on local wall-clock time.
LOCAL_TIMEZONE = os.environ.get("LOCAL_TIMEZONE", "America/New_York")

# Python weekday numbering (Monday=0). 6 = weeks start on Sunday.
WEEK_STARTS_ON = int(os.environ.get("WEEK_STARTS_ON", "6"))

UNTITLED_EVENT_TITLE = "Untitled Event"

# =============================================================================
# WORKLOAD THRESHOLDS (hours: comfortable, busy, high)
# =============================================================================

DEFAULT_THRESHOLD_HOURS = {
    "daily": (4.0, 6.0, 8.0),
    "weekly": (25.0, 35.0, 45.0),
    "monthly": (100.0, 140.0, 180.0),
}

# =============================================================================
# WORKLOAD RULES
# =============================================================================

DEFAULT_MAX_VISITS_PER_DAY = 8
DEFAULT_MAX_HOURS_PER_DAY = 10.0
DEFAULT_MAX_HOURS_PER_WEEK = 50.0
DEFAULT_MAX_CONSECUTIVE_BUSY_DAYS = 5
DEFAULT_MIN_BREAK_MINUTES = 30
DEFAULT_WARN_ON_WEEKEND_WORK = True

# Escalation margins: exceeding a limit by more than this is critical
DAILY_CRITICAL_MARGIN = 2
WEEKLY_CRITICAL_MARGIN_HOURS = 10
STREAK_CRITICAL_MARGIN_DAYS = 2

WEEKEND_WORK_HOURS_LIMIT = 4.0

# =============================================================================
# DURATIONS
# =============================================================================

OVERNIGHT_DAILY_CAP_MINUTES = 12 * 60
OVERNIGHT_MIN_HOURS = 8
HOUSESIT_DURATION_MINUTES = 24 * 60
OVERNIGHT_DURATION_MINUTES = 12 * 60
DEFAULT_SERVICE_DURATION_MINUTES = 30

# Analytics roll-ups count at most this much of any single event
ANALYTICS_MAX_EVENT_MINUTES = 12 * 60
TOP_CLIENTS_LIMIT = 10

INCLUDE_TRAVEL_TIME = os.environ.get("INCLUDE_TRAVEL_TIME", "true").lower() == "true"
DEFAULT_TRAVEL_MINUTES_PER_LEG = int(os.environ.get("TRAVEL_MINUTES_PER_LEG", "15"))

# =============================================================================
# BURNOUT SCORING
# =============================================================================

BURNOUT_POINTS_CRITICAL = 20
BURNOUT_POINTS_WARNING = 10
BURNOUT_POINTS_WEEKLY_HIGH = 25
BURNOUT_POINTS_WEEKLY_BUSY = 15
BURNOUT_POINTS_STREAK = 15
BURNOUT_MAX_SCORE = 100

# (minimum score, level), checked top-down
BURNOUT_LEVEL_CUTOFFS = [(70, "critical"), (50, "high"), (30, "moderate")]

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

DAILY_HEADERS = ["Date", "Day", "Work Hours", "Travel Hours", "Total Hours", "Visits", "Level"]
VISIT_HEADERS = ["Date", "Start", "End", "Client", "Service", "Duration (min)", "Overnight", "Title"]
VIOLATION_HEADERS = [
    "Date", "Rule", "Severity", "Title", "Description",
    "Metric", "Threshold", "Recommendation",
]
SERVICE_HEADERS = ["Service", "Visits", "Hours", "Share (%)"]
CLIENT_HEADERS = ["Client", "Visits", "Hours"]
WEEKLY_HEADERS = ["Week Start", "Week End", "Hours", "Visits", "Level"]
DAY_OF_WEEK_HEADERS = ["Day", "Avg Hours", "Avg Visits"]

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
MAX_EVENTS_PER_REQUEST = int(os.environ.get("MAX_EVENTS_PER_REQUEST", "5000"))
MAX_VISIT_SLOTS = 12  # per day in a booking request
API_VERSION = "1.0.0"
