"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_STATS_STATUS = "Present"
DEFAULT_STATS_EPOCH = "2024-01-01"
DEFAULT_CLASS_COUNTER_KEY = "classSettings"

DAILY_WINDOW_DAYS = 7
WEEKLY_WINDOW_DAYS = 28
MONTHLY_WINDOW_MONTHS = 3
STUDENT_WINDOW_DAYS = 30

TREND_THRESHOLD_PERCENT = 5.0
