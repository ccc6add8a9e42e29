"""The combined service state served over HTTP."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .complexes import ComplexMeta, ComplexStates
from .elevators import Elevator, ElevatorStates
from .trains import TrainStates, Upcoming


@dataclass(frozen=True)
class ComplexFull:
    """Everything known about one complex."""

    meta: ComplexMeta | None
    upcoming: list[Upcoming]
    elevators: list[Elevator]

    def to_json(self) -> dict[str, Any]:
        return {
            "meta": self.meta.to_json() if self.meta is not None else None,
            "upcoming": [u.to_json() for u in self.upcoming],
            "elevators": [e.to_json() for e in self.elevators],
        }


class States:
    """Trains, elevators and complex metadata together."""

    def __init__(
        self,
        complexes: Iterable[Mapping[str, Any]],
        elevators: Iterable[Mapping[str, Any]],
        outages: Iterable[Mapping[str, Any]],
        entrances: Iterable[Mapping[str, Any]],
    ) -> None:
        complexes = list(complexes)
        self.trains = TrainStates(complexes)
        self.elevators = ElevatorStates(elevators).with_outages(outages)
        self.complexes = ComplexStates(complexes, entrances)

    def get_full(self, complex_id: Any) -> ComplexFull | None:
        """All data for a complex, or None without elevators or train data."""
        meta = self.complexes.get(complex_id)
        elevators = self.elevators.get(complex_id)
        if elevators is None:
            return None
        upcoming = self.trains.get(complex_id)
        if upcoming is None:
            return None
        return ComplexFull(meta=meta, upcoming=upcoming, elevators=elevators)