"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_RECORDS = 1000
DEFAULT_PAGE_SIZE = 10

DEFAULT_DAILY_HOURS = 8
DEFAULT_WEEKLY_HOURS = 40

# Punches before EARLY_HOUR or from LATE_HOUR on ask for a justification.
EARLY_HOUR = 6
LATE_HOUR = 22

WEEK_WINDOW_DAYS = 7
MONTH_WINDOW_DAYS = 30

REFRESH_INTERVAL_SECONDS = 300

RECORDS_KEY = "timeRecords"
SETTINGS_KEY = "timeTrackerSettings"
JOURNEY_ALERT_PREFIX = "journey_alert_"

EXPORT_FILENAME_TEMPLATE = "time_tracker_{date}.json"
