from subpar.batch import Alert, Batch
from subpar.ids import StopId
from subpar.position import Position, PositionStatus
from subpar.schedule import Schedule, StopPlan, Times
from subpar.timestamp import Timestamp
from subpar.trip import TripId

T0 = Timestamp.from_unix(1_600_000_000)


def schedule():
    return Schedule(
        trip=TripId.default(),
        asof=Timestamp.epoch(),
        stops=[StopPlan(StopId("101N"), Times(T0, None))],
    )


def position():
    return Position(
        trip=TripId.default(),
        stop=StopId("101N"),
        stop_n=None,
        status=PositionStatus.AT,
        time=T0,
    )


def test_schedules_filters_other_updates():
    first, second = schedule(), schedule()
    batch = Batch(
        time=T0,
        msgs=[Alert(), first, ValueError("broken"), position(), second],
    )
    found = list(batch.schedules())
    assert len(found) == 2
    assert found[0] is first
    assert found[1] is second


def test_empty_batch():
    batch = Batch(time=T0)
    assert batch.msgs == []
    assert list(batch.schedules()) == []


def test_alert_only_batch():
    batch = Batch(time=T0, msgs=[Alert()])
    assert batch.msgs == [Alert()]
    assert list(batch.schedules()) == []