from datetime import datetime, timedelta

from parkwatch.core.constants import KEY_LAST_SAVED_HISTORY, history_key
from parkwatch.services.history.sampler import (
    append_to_bucket,
    epoch_ms,
    record_sample,
    should_sample,
    weekday_of,
)
from parkwatch.services.parking import normalize_lots

from conftest import SAMPLE_LOTS

INTERVAL_MS = 15 * 60 * 1000
# Wednesday
T = datetime(2026, 10, 21, 8, 0, 0)


def _snapshot():
    return normalize_lots(SAMPLE_LOTS)


def test_weekday_sunday_is_zero():
    assert weekday_of(datetime(2026, 10, 18, 12)) == 0  # Sunday
    assert weekday_of(T) == 3
    assert weekday_of(datetime(2026, 10, 24, 12)) == 6  # Saturday


def test_should_sample_without_previous_stamp():
    assert should_sample(None, 1000, INTERVAL_MS)


def test_should_sample_interval_edge():
    t = epoch_ms(T)
    assert not should_sample(t, t + INTERVAL_MS - 1, INTERVAL_MS)
    assert should_sample(t, t + INTERVAL_MS, INTERVAL_MS)


def test_first_sample_is_admitted(store):
    sample = record_sample(store, _snapshot(), "Reading", now=T, interval_ms=INTERVAL_MS)

    assert sample is not None
    assert sample.to_dict() == {"timestamp": epoch_ms(T), "spaces": 17, "lotName": "Reading"}
    day_map = store.get(history_key(3))
    assert day_map == {"8": [sample.to_dict()]}
    assert store.get(KEY_LAST_SAVED_HISTORY) == epoch_ms(T)


def test_sample_not_admitted_before_interval(store):
    store.set(KEY_LAST_SAVED_HISTORY, epoch_ms(T))
    early = T + timedelta(minutes=15) - timedelta(milliseconds=1)

    assert record_sample(store, _snapshot(), "Reading", now=early, interval_ms=INTERVAL_MS) is None
    assert store.get(history_key(3)) is None
    assert store.get(KEY_LAST_SAVED_HISTORY) == epoch_ms(T)


def test_sample_admitted_at_interval(store):
    store.set(KEY_LAST_SAVED_HISTORY, epoch_ms(T))
    on_time = T + timedelta(minutes=15)

    sample = record_sample(store, _snapshot(), "Reading", now=on_time, interval_ms=INTERVAL_MS)

    assert sample is not None
    assert store.get(KEY_LAST_SAVED_HISTORY) == epoch_ms(on_time)


def test_bucket_keeps_newest_eight(store):
    old = [{"timestamp": i, "spaces": i, "lotName": "Reading"} for i in range(8)]
    store.set(history_key(3), {"8": old})

    record_sample(store, _snapshot(), "Reading", now=T, interval_ms=INTERVAL_MS, cap=8)

    bucket = store.get(history_key(3))["8"]
    assert len(bucket) == 8
    assert [s["spaces"] for s in bucket] == [1, 2, 3, 4, 5, 6, 7, 17]


def test_missing_lot_still_stamps_last_saved(store):
    sample = record_sample(store, _snapshot(), "Not There", now=T, interval_ms=INTERVAL_MS)

    assert sample is None
    assert store.get(history_key(3)) is None
    assert store.get(KEY_LAST_SAVED_HISTORY) == epoch_ms(T)


def test_no_selection_still_stamps_last_saved(store):
    assert record_sample(store, _snapshot(), None, now=T, interval_ms=INTERVAL_MS) is None
    assert store.get(KEY_LAST_SAVED_HISTORY) == epoch_ms(T)


def test_other_hours_untouched(store):
    store.set(history_key(3), {"7": [{"timestamp": 1, "spaces": 5, "lotName": "Reading"}]})

    record_sample(store, _snapshot(), "Reading", now=T, interval_ms=INTERVAL_MS)

    day_map = store.get(history_key(3))
    assert len(day_map["7"]) == 1
    assert len(day_map["8"]) == 1


def test_append_to_bucket_caps_in_place():
    day_map = {}
    for i in range(10):
        append_to_bucket(day_map, 23, {"spaces": i}, cap=3)
    assert day_map == {"23": [{"spaces": 7}, {"spaces": 8}, {"spaces": 9}]}
