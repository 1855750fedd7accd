"""
History: admission-controlled sampling into (weekday, hour) buckets and per-hour statistics.

- historyStats{0..6}: hour buckets of {timestamp, spaces, lotName}, capped per bucket.
- lastSavedHistory: epoch ms of the last admitted sample (write rate limiter).
"""
from parkwatch.services.history.sampler import HistorySample, record_sample, should_sample, weekday_of
from parkwatch.services.history.stats import (
    METRICS,
    PERIODS,
    HourlyStats,
    hourly_stats_from_store,
    period_hours,
    reduce_hours,
)

__all__ = [
    "HistorySample",
    "HourlyStats",
    "METRICS",
    "PERIODS",
    "hourly_stats_from_store",
    "period_hours",
    "record_sample",
    "reduce_hours",
    "should_sample",
    "weekday_of",
]
