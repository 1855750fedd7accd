"""
Centralized constants for the refresh job, storage keys and badge thresholds.

Change job IDs, keys or thresholds here instead of scattering literals across main and routes.
Intervals and caps that operators tune live in config.Settings (env-driven).
"""
from parkwatch.config import settings

# Scheduler job ID (must match id used in main.py add_job)
PARKING_REFRESH_JOB_ID = "parking_refresh"
PARKING_REFRESH_INTERVAL_SECONDS = settings.refresh_interval_seconds

# History sampling (admission interval in ms, FIFO cap per weekday/hour bucket)
HISTORY_INTERVAL_MS = settings.history_interval_minutes * 60 * 1000
HISTORY_BUCKET_CAP = settings.history_bucket_cap

# Key/value store keys
KEY_PARKING_LOTS = "parkingLots"
KEY_SELECTED_LOT = "selectedLot"
KEY_LAST_SAVED_HISTORY = "lastSavedHistory"
KEY_BADGE = "badge"
HISTORY_KEY_PREFIX = "historyStats"


def history_key(weekday: int) -> str:
    """Storage key for one weekday's hour buckets. E.g. historyStats3."""
    return f"{HISTORY_KEY_PREFIX}{weekday}"


# Streamed page payload: the data line starts with STREAM_LINE_PREFIX and mentions STREAM_MARKER
STREAM_LINE_PREFIX = "5:"
STREAM_MARKER = "parkingLots"
STREAM_PAYLOAD_INDEX = 3

# Badge / chart severity: first threshold the free count is below wins; else green
COLOR_RED = "#F44336"
COLOR_ORANGE = "#FF9800"
COLOR_YELLOW = "#FFEB3B"
COLOR_GREEN = "#4CAF50"
COLOR_NO_DATA = "#CCCCCC"
SEVERITY_THRESHOLDS: list[tuple[int, str, str]] = [
    (1, "red", COLOR_RED),  # 0 free
    (20, "orange", COLOR_ORANGE),
    (30, "yellow", COLOR_YELLOW),
]
SEVERITY_DEFAULT = ("green", COLOR_GREEN)

# Statistics
DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24
