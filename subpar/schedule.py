"""Planned stop times of a trip."""

from __future__ import annotations

from dataclasses import dataclass

from .ids import StopId
from .timestamp import Timestamp
from .trip import TripId


@dataclass(frozen=True)
class Times:
    """Arrival and departure at a stop; at least one must be given.

    Arrival only marks the final stop, departure only the first.
    """

    arr: Timestamp | None
    dep: Timestamp | None

    def __post_init__(self) -> None:
        if self.arr is None and self.dep is None:
            raise ValueError("Invalid 'times' w/ no times")

    def t0(self) -> Timestamp:
        """The earliest time at the stop: arrival if known, else departure."""
        return self.arr if self.arr is not None else self.dep

    def __str__(self) -> str:
        if self.dep is None:
            return f"FINAL {self.arr}"
        if self.arr is None:
            return f"FIRST {self.dep}"
        dur = self.dep.seconds_since(self.arr)
        if dur == 0:
            assert self.arr == self.dep, f"{self.arr} != {self.dep}, ds = {dur}"
            return f"{self.arr}"
        return f"{self.arr} for {dur}s"


@dataclass(frozen=True)
class StopPlan:
    """When a trip is expected at one stop."""

    id: StopId
    times: Times


@dataclass(frozen=True)
class Schedule:
    """The planned stops of a trip as of a point in time."""

    trip: TripId
    asof: Timestamp
    stops: tuple[StopPlan, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "stops", tuple(self.stops))

    def __str__(self) -> str:
        text = str(self.trip.name())
        if self.asof != Timestamp.epoch():
            text += f" asof {Timestamp.now().seconds_since(self.asof)}s ago"
        plans = " → ".join(f"{plan.id} {plan.times}" for plan in self.stops)
        return f"{text}: {plans}"