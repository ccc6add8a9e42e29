"""Decoding of GTFS-realtime messages into updates.

The functions accept objects with the interface of protobuf messages
generated from ``gtfs-realtime.proto``: singular fields are attributes,
presence is tested with ``HasField`` and repeated fields are iterable.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from .batch import Alert, Batch, Update
from .ids import StopId
from .position import Position, PositionStatus
from .schedule import Schedule, StopPlan, Times
from .timestamp import Timestamp
from .trip import TripId

# VehiclePosition.VehicleStopStatus
INCOMING_AT = 0
STOPPED_AT = 1
IN_TRANSIT_TO = 2

_STOP_STATUS = {
    STOPPED_AT: PositionStatus.AT,
    INCOMING_AT: PositionStatus.NEAR,
    IN_TRANSIT_TO: PositionStatus.EN_ROUTE,
}


class GtfsParseError(ValueError):
    """A feed message could not be turned into an update."""


def pbget(value, *args):
    """Return ``value`` if every check in ``args`` is true, else raise."""
    for number, check in enumerate(args, start=1):
        if not check:
            raise GtfsParseError(f"Failed to get value because check {number} failed")
    return value


@contextmanager
def _context(what: str) -> Iterator[None]:
    try:
        yield
    except ValueError as exc:
        raise GtfsParseError(f"{what}: {exc}") from exc


def _require(msg, name: str):
    if not msg.HasField(name):
        raise GtfsParseError(f"Failed to get '{name}' because check failed")
    return getattr(msg, name)


def _trip_id(descriptor) -> TripId:
    raw = _require(descriptor, "trip_id")
    start = Timestamp.from_yyyymmdd(_require(descriptor, "start_date")).date()
    return TripId.parse(raw, start)


def _event_time(event) -> Timestamp:
    return Timestamp.from_unix(_require(event, "time"))


def parse_batch(feed) -> Batch:
    """Decode a FeedMessage; failed entities are kept as GtfsParseError values."""
    header = _require(feed, "header")
    time = Timestamp.from_unix(_require(header, "timestamp"))
    msgs: list[Update | Exception] = []
    for entity in feed.entity:
        try:
            msgs.append(parse_update(entity))
        except GtfsParseError as exc:
            msgs.append(exc)
    return Batch(time=time, msgs=msgs)


def parse_update(entity) -> Update:
    """Decode a FeedEntity holding exactly one of trip update, vehicle or alert."""
    with _context(f"feed entity {getattr(entity, 'id', '')!r}"):
        has_trip = entity.HasField("trip_update")
        has_vehicle = entity.HasField("vehicle")
        has_alert = entity.HasField("alert")
        flags = (has_trip, has_vehicle, has_alert)
        if flags == (True, False, False):
            return parse_schedule(entity.trip_update)
        if flags == (False, True, False):
            return parse_position(entity.vehicle)
        if flags == (False, False, True):
            return Alert()
        if not any(flags):
            raise GtfsParseError("FeedEntity unrecognized")
        t, v, a = (str(flag).lower() for flag in flags)
        raise GtfsParseError(f"FeedEntity multiple: trip={t} pos={v} alrt={a}")


def parse_position(vehicle) -> Position:
    """Decode a VehiclePosition."""
    with _context("vehicle position"):
        trip = _trip_id(_require(vehicle, "trip"))
        stop_n = vehicle.current_stop_sequence if vehicle.HasField("current_stop_sequence") else None
        stop = StopId(_require(vehicle, "stop_id"))
        time = Timestamp.from_unix(_require(vehicle, "timestamp"))
        if vehicle.HasField("current_status"):
            code = vehicle.current_status
            if code not in _STOP_STATUS:
                raise GtfsParseError(f"unknown vehicle stop status {code}")
            status = _STOP_STATUS[code]
        else:
            status = PositionStatus.NOTHING
        return Position(trip=trip, stop=stop, stop_n=stop_n, status=status, time=time)


def parse_schedule(trip_update) -> Schedule:
    """Decode a TripUpdate into a schedule of planned stops."""
    with _context("trip update"):
        trip = _trip_id(_require(trip_update, "trip"))
        stops = []
        for update in trip_update.stop_time_update:
            stop = StopId(_require(update, "stop_id"))
            arr = _event_time(update.arrival) if update.HasField("arrival") else None
            dep = _event_time(update.departure) if update.HasField("departure") else None
            stops.append(StopPlan(stop, Times(arr, dep)))
        return Schedule(trip=trip, asof=Timestamp.epoch(), stops=stops)