"""Upcoming train arrivals per complex, fed from realtime batches."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any

from .batch import Batch
from .ids import StopId, TripIdStr
from .timestamp import Timestamp

_log = logging.getLogger(__name__)

_MAX_AGE = timedelta(seconds=45)


def _rfc3339(ts: Timestamp) -> str:
    return ts.as_utc().isoformat().replace("+00:00", "Z")


@dataclass
class Upcoming:
    """The expected arrival of one trip at a complex."""

    trip: TripIdStr
    stop: StopId
    arrival: Timestamp
    message: Timestamp

    def to_json(self) -> dict[str, Any]:
        return {
            "trip": str(self.trip),
            "stop": str(self.stop),
            "arrival": _rfc3339(self.arrival),
            "message": _rfc3339(self.message),
        }


_ByTrip = dict[TripIdStr, Upcoming]


class TrainStates:
    """Thread-safe upcoming arrivals keyed by complex and trip."""

    def __init__(self, complexes: Iterable[Mapping[str, Any]]) -> None:
        self._stops: dict[StopId, Any] = {}
        for info in complexes:
            for stop in info["stop_ids"]:
                self._stops[StopId(stop)] = info["complex_id"]
        self._trains: dict[Any, _ByTrip] = {}
        self._lock = threading.Lock()

    def update(self, batch: Batch) -> None:
        """Merge the schedules of a batch into the current state."""
        new = self._preprocess(batch)
        with self._lock:
            self._merge(new)

    def get(self, complex_id: Any) -> list[Upcoming] | None:
        """Upcoming arrivals at a complex sorted by arrival, or None if unknown."""
        with self._lock:
            by_trip = self._trains.get(complex_id)
            if by_trip is None:
                return None
            elems = [replace(u) for u in by_trip.values()]
        return sorted(elems, key=lambda u: u.arrival)

    def _preprocess(self, batch: Batch) -> dict[Any, _ByTrip]:
        message = batch.time
        found: dict[Any, _ByTrip] = {complex_id: {} for complex_id in self._stops.values()}
        for schedule in batch.schedules():
            trip = schedule.trip.name()
            for plan in schedule.stops:
                stop = plan.id.parent()
                complex_id = self._stops.get(stop)
                if complex_id is None:
                    _log.warning("msg had unknown stop_id %s", stop)
                    continue
                found.setdefault(complex_id, {})[trip] = Upcoming(
                    trip=trip, stop=stop, arrival=plan.times.t0(), message=message
                )
        return found

    def _merge(self, new: dict[Any, _ByTrip]) -> None:
        for complex_id, msgs in new.items():
            old = self._trains.get(complex_id)
            if old is None:
                self._trains[complex_id] = {trip: replace(u) for trip, u in msgs.items()}
                continue
            for trip, msg in msgs.items():
                slot = old.get(trip)
                if slot is None:
                    old[trip] = replace(msg)
                elif slot.message <= msg.message:
                    if slot.stop == msg.stop:
                        slot.message = msg.message
                        slot.arrival = msg.arrival
                    else:
                        _log.warning("stop mismatch; %r %r", slot, msg)
                else:
                    _log.warning("weird; old msg time older than new msg time")
            cutoff = Timestamp.now() - _MAX_AGE
            for trip in [t for t, u in old.items() if not u.message > cutoff]:
                del old[trip]