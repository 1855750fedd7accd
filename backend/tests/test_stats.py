from datetime import datetime

import pytest

from parkwatch.core.constants import KEY_PARKING_LOTS, history_key
from parkwatch.services.history.stats import hourly_stats_from_store, period_hours, reduce_hours


def _samples(lot, *spaces):
    return [{"timestamp": i, "spaces": s, "lotName": lot} for i, s in enumerate(spaces)]


def _loader(days):
    return lambda wd: days.get(wd)


def test_average_example():
    days = {3: {"8": _samples("Reading", 12, 18, 15)}}
    stats = reduce_hours(_loader(days), 3, "full", "Reading", "average")

    assert len(stats.values) == 24
    assert stats.values[8] == 15
    assert stats.values[9] is None
    assert stats.has_data


def test_empty_history_has_no_data():
    stats = reduce_hours(_loader({}), 3, "full", "Reading", "max")
    assert stats.values == [None] * 24
    assert not stats.has_data


def test_only_selected_lot_counts():
    days = {1: {"10": _samples("Habima", 0, 0) + _samples("Reading", 7)}}
    stats = reduce_hours(_loader(days), 1, "full", "Reading", "min")
    assert stats.values[10] == 7

    other = reduce_hours(_loader(days), 1, "full", "Nobody", "min")
    assert not other.has_data


def test_zero_free_is_data_not_none():
    days = {2: {"5": _samples("Habima", 0)}}
    stats = reduce_hours(_loader(days), 2, "full", "Habima", "max")
    assert stats.values[5] == 0
    assert stats.has_data


def test_max_and_min():
    days = {0: {"0": _samples("A", 4, 9, 2)}}
    assert reduce_hours(_loader(days), 0, "full", "A", "max").values[0] == 9
    assert reduce_hours(_loader(days), 0, "full", "A", "min").values[0] == 2


def test_average_rounds_half_up():
    days = {0: {"0": _samples("A", 1, 2), "1": _samples("A", 2, 3, 3, 3)}}
    stats = reduce_hours(_loader(days), 0, "full", "A", "average")
    assert stats.values[0] == 2
    assert stats.values[1] == 3


def test_night_period_wraps_into_next_day():
    cells = period_hours(5, "night")
    assert cells == [(5, 20), (5, 21), (5, 22), (5, 23)] + [(6, h) for h in range(8)]


def test_night_period_saturday_wraps_to_sunday():
    cells = period_hours(6, "night")
    assert cells[4:] == [(0, h) for h in range(8)]


def test_day_period_hours():
    assert period_hours(2, "day") == [(2, h) for h in range(8, 20)]


def test_night_reads_following_day_buckets():
    days = {5: {"22": _samples("A", 10)}, 6: {"3": _samples("A", 30)}}
    stats = reduce_hours(_loader(days), 5, "night", "A", "max")

    assert stats.labels[0] == "20:00"
    assert stats.labels[-1] == "07:00"
    assert stats.values[2] == 10
    assert stats.values[7] == 30
    assert stats.values.count(None) == 10


@pytest.mark.parametrize(
    "day, period, metric",
    [(7, "full", "max"), (-1, "full", "max"), (1, "evening", "max"), (1, "full", "median")],
)
def test_invalid_arguments(day, period, metric):
    with pytest.raises(ValueError):
        reduce_hours(_loader({}), day, period, "A", metric)


def test_live_overlay_in_range():
    now = datetime(2026, 10, 21, 10, 30)  # Wednesday
    days = {3: {"8": _samples("A", 5)}}
    stats = reduce_hours(_loader(days), 3, "full", "A", "max", live=4, now=now)

    assert stats.live_index == 10
    assert stats.values[10] == 4
    assert stats.values[8] == 5


def test_live_overlay_outside_range():
    now = datetime(2026, 10, 21, 10, 30)
    stats = reduce_hours(_loader({}), 2, "full", "A", "max", live=4, now=now)
    assert stats.live_index is None
    assert stats.values == [None] * 24


def test_stats_from_store_with_live(store):
    store.set_many({
        history_key(3): {"9": _samples("Reading", 20, 22)},
        KEY_PARKING_LOTS: [{"name": "Reading", "address": "Levanon 1", "freeParkingNumber": 3}],
    })
    now = datetime(2026, 10, 21, 8, 15)

    stats = hourly_stats_from_store(store, 3, "day", "Reading", "average", live=True, now=now)

    assert stats.hours[0] == (3, 8)
    assert stats.values[0] == 3
    assert stats.live_index == 0
    assert stats.values[1] == 21
    assert stats.has_data
