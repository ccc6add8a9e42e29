from datetime import timedelta

import pytest

from subpar.ids import StopId
from subpar.schedule import Schedule, StopPlan, Times
from subpar.timestamp import Timestamp
from subpar.trip import TripId

T0 = Timestamp.from_unix(1_600_000_000)


def test_times_needs_a_time():
    with pytest.raises(ValueError, match="no times"):
        Times(None, None)


def test_t0_prefers_arrival():
    later = T0 + timedelta(seconds=30)
    assert Times(T0, later).t0() == T0
    assert Times(None, later).t0() == later
    assert Times(T0, None).t0() == T0


def test_str_final_and_first():
    assert str(Times(T0, None)) == f"FINAL {T0}"
    assert str(Times(None, T0)) == f"FIRST {T0}"


def test_str_mid_same_time():
    assert str(Times(T0, T0)) == str(T0)


def test_str_mid_with_dwell():
    dep = T0 + timedelta(seconds=30)
    assert str(Times(T0, dep)) == f"{T0} for 30s"


def make_schedule(asof, count):
    stops = [
        StopPlan(StopId(f"L0{i}N"), Times(T0 + timedelta(minutes=i), None))
        for i in range(count)
    ]
    return Schedule(trip=TripId.default(), asof=asof, stops=stops)


def test_stops_are_tuple():
    sched = make_schedule(Timestamp.epoch(), 3)
    assert isinstance(sched.stops, tuple)
    assert len(sched.stops) == 3


def test_str_epoch_asof():
    sched = make_schedule(Timestamp.epoch(), 3)
    text = str(sched)
    assert text.startswith("000000_0..N: L00N ")
    assert text.count(" → ") == 2
    assert "asof" not in text


def test_str_with_asof():
    sched = make_schedule(Timestamp.now(), 1)
    text = str(sched)
    assert text.startswith("000000_0..N asof ")
    assert "s ago: " in text
    assert " → " not in text