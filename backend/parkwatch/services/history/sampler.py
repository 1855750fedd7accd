"""
History sampler: admission-controlled append into (weekday, hour) buckets.

- Store keys: historyStats{0..6} = { "0": [sample, ...], ..., "23": [...] }, lastSavedHistory = epoch ms.
- Weekday numbering is Sunday = 0 ... Saturday = 6 (local wall clock).
- Admission: sample when lastSavedHistory is unset or now - lastSavedHistory >= interval. Evaluated
  after each fetch cycle, so real spacing is the interval rounded up to the next cycle.
- Each hour bucket keeps the newest HISTORY_BUCKET_CAP samples (oldest dropped first).
- lastSavedHistory advances whenever admission passes, even when the selected lot is unset or
  missing from the snapshot, so a missing lot does not retry every cycle.
"""
import logging
from datetime import datetime
from typing import Any

from parkwatch.core.constants import (
    HISTORY_BUCKET_CAP,
    HISTORY_INTERVAL_MS,
    KEY_LAST_SAVED_HISTORY,
    history_key,
)
from parkwatch.services.parking.types import ParkingLot, find_lot
from parkwatch.services.store import KeyValueStore

logger = logging.getLogger(__name__)


class HistorySample:
    """One captured free-space count for a lot."""

    __slots__ = ("timestamp", "spaces", "lot_name")

    def __init__(self, *, timestamp: int, spaces: Any, lot_name: str):
        self.timestamp = timestamp
        self.spaces = spaces
        self.lot_name = lot_name

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "spaces": self.spaces, "lotName": self.lot_name}


def epoch_ms(dt: datetime) -> int:
    return int(round(dt.timestamp() * 1000))


def weekday_of(dt: datetime) -> int:
    """Sunday = 0 ... Saturday = 6."""
    return (dt.weekday() + 1) % 7


def should_sample(last_saved_ms: Any, now_ms: int, interval_ms: int = HISTORY_INTERVAL_MS) -> bool:
    if not last_saved_ms:
        return True
    try:
        return now_ms - int(last_saved_ms) >= interval_ms
    except (TypeError, ValueError):
        # Unreadable stamp: treat as never saved.
        return True


def append_to_bucket(
    day_map: dict[str, list], hour: int, sample: dict[str, Any], cap: int = HISTORY_BUCKET_CAP
) -> dict[str, list]:
    """Append sample to day_map[hour] in place, keeping the newest cap entries. Returns day_map."""
    bucket = day_map.setdefault(str(hour), [])
    if not isinstance(bucket, list):
        bucket = day_map[str(hour)] = []
    bucket.append(sample)
    if len(bucket) > cap:
        del bucket[: len(bucket) - cap]
    return day_map


def record_sample(
    store: KeyValueStore,
    snapshot: list[ParkingLot] | None,
    selected_lot: str | None,
    *,
    now: datetime | None = None,
    interval_ms: int = HISTORY_INTERVAL_MS,
    cap: int = HISTORY_BUCKET_CAP,
) -> HistorySample | None:
    """
    Append one sample for selected_lot if the interval has elapsed. Returns the sample written,
    or None when not admitted or when no lot matched. Raises PersistenceError from the store.
    """
    now = now or datetime.now()
    now_ms = epoch_ms(now)
    last_saved = store.get(KEY_LAST_SAVED_HISTORY)
    if not should_sample(last_saved, now_ms, interval_ms):
        return None

    lot = find_lot(snapshot, selected_lot)
    if lot is None:
        logger.debug("History: admitted but lot %r not in snapshot; stamping only", selected_lot)
        store.set(KEY_LAST_SAVED_HISTORY, now_ms)
        return None

    weekday, hour = weekday_of(now), now.hour
    key = history_key(weekday)
    day_map = store.get(key) or {}
    if not isinstance(day_map, dict):
        day_map = {}
    sample = HistorySample(timestamp=now_ms, spaces=lot.free_parking_number, lot_name=selected_lot)
    append_to_bucket(day_map, hour, sample.to_dict(), cap)
    store.set_many({key: day_map, KEY_LAST_SAVED_HISTORY: now_ms})
    logger.info("History saved for day %s, hour %s: %s=%s", weekday, hour, selected_lot, lot.free_parking_number)
    return sample
