"""
Per-hour statistics over the bucketed history.

Periods:
- full:  00:00-23:59 of day (24 hours)
- day:   08:00-19:59 of day (12 hours)
- night: 20:00-23:59 of day, then 00:00-07:59 of (day + 1) % 7 (12 hours)

Each hour yields None (no samples for the lot) or max / min / average (rounded mean) of that
hour's samples for the lot. None is "no data", never "0 free".
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from parkwatch.core.constants import DAYS_PER_WEEK, HOURS_PER_DAY, KEY_PARKING_LOTS, history_key
from parkwatch.services.history.sampler import weekday_of
from parkwatch.services.parking.normalize import snapshot_from_rows
from parkwatch.services.parking.types import find_lot
from parkwatch.services.store import KeyValueStore

PERIOD_FULL = "full"
PERIOD_DAY = "day"
PERIOD_NIGHT = "night"
PERIODS = (PERIOD_FULL, PERIOD_DAY, PERIOD_NIGHT)

METRIC_MAX = "max"
METRIC_MIN = "min"
METRIC_AVERAGE = "average"
METRICS = (METRIC_MAX, METRIC_MIN, METRIC_AVERAGE)

DAY_START_HOUR = 8
NIGHT_START_HOUR = 20


@dataclass
class HourlyStats:
    day: int
    period: str
    metric: str
    lot_name: str | None
    hours: list[tuple[int, int]] = field(default_factory=list)  # (weekday, hour) in display order
    values: list[int | float | None] = field(default_factory=list)
    has_data: bool = False
    live_index: int | None = None

    @property
    def labels(self) -> list[str]:
        return [f"{h:02d}:00" for _, h in self.hours]


def _check_day(day: int) -> int:
    if not isinstance(day, int) or isinstance(day, bool) or not 0 <= day < DAYS_PER_WEEK:
        raise ValueError(f"day must be 0-6 (Sunday=0), got {day!r}")
    return day


def period_hours(day: int, period: str = PERIOD_FULL) -> list[tuple[int, int]]:
    """(weekday, hour) cells covered by period, in order. Night wraps into the next weekday."""
    day = _check_day(day)
    if period == PERIOD_FULL:
        return [(day, h) for h in range(HOURS_PER_DAY)]
    if period == PERIOD_DAY:
        return [(day, h) for h in range(DAY_START_HOUR, NIGHT_START_HOUR)]
    if period == PERIOD_NIGHT:
        next_day = (day + 1) % DAYS_PER_WEEK
        return [(day, h) for h in range(NIGHT_START_HOUR, HOURS_PER_DAY)] + [
            (next_day, h) for h in range(0, DAY_START_HOUR)
        ]
    raise ValueError(f"period must be one of {PERIODS}, got {period!r}")


def _numeric(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def apply_metric(values: list[int | float], metric: str) -> int | float:
    if metric == METRIC_MAX:
        return max(values)
    if metric == METRIC_MIN:
        return min(values)
    if metric == METRIC_AVERAGE:
        return round_half_up(sum(values) / len(values))
    raise ValueError(f"metric must be one of {METRICS}, got {metric!r}")


def bucket_values(day_map: dict | None, hour: int, lot_name: str | None) -> list[int | float]:
    """Numeric spaces of the samples in day_map[hour] captured for lot_name."""
    if not isinstance(day_map, dict):
        return []
    samples = day_map.get(str(hour)) or []
    if not isinstance(samples, list):
        return []
    return [
        s.get("spaces")
        for s in samples
        if isinstance(s, dict) and s.get("lotName") == lot_name and _numeric(s.get("spaces"))
    ]


def reduce_hours(
    load_day: Callable[[int], dict | None],
    day: int,
    period: str,
    lot_name: str | None,
    metric: str,
    *,
    live: int | float | None = None,
    now: datetime | None = None,
) -> HourlyStats:
    """
    One value per hour in period. load_day(weekday) returns that weekday's bucket map.
    When live is given and the current (weekday, hour) is in range, that hour shows live instead.
    """
    if metric not in METRICS:
        raise ValueError(f"metric must be one of {METRICS}, got {metric!r}")
    cells = period_hours(day, period)
    days: dict[int, dict | None] = {}
    out = HourlyStats(day=day, period=period, metric=metric, lot_name=lot_name, hours=cells)
    for wd, hour in cells:
        if wd not in days:
            days[wd] = load_day(wd)
        values = bucket_values(days[wd], hour, lot_name)
        if not values:
            out.values.append(None)
            continue
        out.has_data = True
        out.values.append(apply_metric(values, metric))

    if _numeric(live):
        now = now or datetime.now()
        current = (weekday_of(now), now.hour)
        if current in cells:
            out.live_index = cells.index(current)
            out.values[out.live_index] = live
    return out


def hourly_stats_from_store(
    store: KeyValueStore,
    day: int,
    period: str,
    lot_name: str | None,
    metric: str,
    *,
    live: bool = False,
    now: datetime | None = None,
) -> HourlyStats:
    """reduce_hours over the kv store; live overlay reads the lot's count from the stored snapshot."""
    live_value = None
    if live:
        snapshot = snapshot_from_rows(store.get(KEY_PARKING_LOTS))
        lot = find_lot(snapshot, lot_name)
        live_value = lot.free_parking_number if lot else None
    return reduce_hours(
        lambda wd: store.get(history_key(wd)),
        day,
        period,
        lot_name,
        metric,
        live=live_value,
        now=now,
    )
