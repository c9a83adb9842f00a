"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PERIOD_DAYS = 30
MIN_PERIOD_DAYS = 1
MAX_PERIOD_DAYS = 365

LATES_PER_ABSENCE = 3
ABSENCE_WARNING_THRESHOLD = 2
DEFAULT_ALLOWED_ABSENCES = 2

NO_REJECTION_REASON = "사유 없음"
DEFAULT_LIST_LIMIT = 200
