"""Elevator and escalator status per complex."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from .ids import Route

_log = logging.getLogger(__name__)


def _datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class Outage:
    """A current or upcoming outage of one piece of equipment."""

    id: Any
    start: datetime
    ada: bool
    est_return: datetime
    reason: str
    upcoming: bool
    maintenance: bool

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Outage:
        """Build from an outage record with keys ``equipment``, ``outagedate``,
        ``ada``, ``estimatedreturntoservice``, ``reason``, ``isupcomingoutage``
        and ``ismaintenanceoutage``."""
        return cls(
            id=record["equipment"],
            start=_datetime(record["outagedate"]),
            ada=bool(record["ada"]),
            est_return=_datetime(record["estimatedreturntoservice"]),
            reason=record["reason"],
            upcoming=bool(record["isupcomingoutage"]),
            maintenance=bool(record["ismaintenanceoutage"]),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "start": self.start.isoformat(),
            "ada": self.ada,
            "est_return": self.est_return.isoformat(),
            "reason": self.reason,
            "upcoming": self.upcoming,
            "maintenance": self.maintenance,
        }


@dataclass
class Elevator:
    """An elevator or escalator and its current outage, if any."""

    id: Any
    complex_id: Any
    lines: list[Route]
    is_escalator: bool
    ada: bool
    is_active: bool
    desc: str
    serving: str
    nearby: list[tuple[Any, Route]] = field(default_factory=list)
    buses: str = ""
    alt_desc: str = ""
    outage: Outage | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Elevator:
        """Build from an equipment record with keys ``equipmentno``,
        ``complex_id``, ``equipmenttype``, ``isactive``, ``ada``, ``serving``,
        ``linesservedbyelevator``, ``shortdescription``, ``busconnections``
        and ``alternativeroute``."""
        return cls(
            id=record["equipmentno"],
            complex_id=record["complex_id"],
            lines=[Route(line) for line in record["linesservedbyelevator"]],
            is_escalator=record["equipmenttype"] == "ES",
            ada=bool(record["ada"]),
            is_active=bool(record["isactive"]),
            desc=record["shortdescription"],
            serving=record["serving"],
            buses=record["busconnections"],
            alt_desc=record["alternativeroute"],
        )

    def copy(self) -> Elevator:
        return replace(self, lines=list(self.lines), nearby=list(self.nearby))

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "complex_id": self.complex_id,
            "lines": [str(line) for line in self.lines],
            "is_escalator": self.is_escalator,
            "ada": self.ada,
            "is_active": self.is_active,
            "desc": self.desc,
            "serving": self.serving,
            "nearby": [[cid, str(route)] for cid, route in self.nearby],
            "buses": self.buses,
            "alt_desc": self.alt_desc,
            "outage": self.outage.to_json() if self.outage is not None else None,
        }


@dataclass(frozen=True)
class ElevatorSummary:
    """Complexes that have at least one piece of equipment out."""

    outages: tuple[Any, ...]

    def to_json(self) -> dict[str, Any]:
        return {"outages": list(self.outages)}


class ElevatorStates:
    """Thread-safe elevator status, updated from outage lists."""

    def __init__(self, equipment: Iterable[Mapping[str, Any]]) -> None:
        records = list(equipment)
        self._lock = threading.Lock()
        self._elevators: dict[Any, list[Elevator]] = {}
        for record in records:
            self._elevators.setdefault(record["complex_id"], []).append(
                Elevator.from_record(record)
            )
        self._complexes: dict[Any, Any] = {
            record["equipmentno"]: record["complex_id"] for record in records
        }
        self._summary: ElevatorSummary | None = None

    def with_outages(self, outages: Iterable[Mapping[str, Any]]) -> ElevatorStates:
        self.update(outages)
        return self

    def update(self, outages: Iterable[Mapping[str, Any]]) -> None:
        """Replace all outages with the given list."""
        with self._lock:
            self._summary = None
            for elevator in (e for els in self._elevators.values() for e in els):
                elevator.outage = None
            for record in outages:
                equip_id = record["equipment"]
                complex_id = self._complexes.get(equip_id)
                if complex_id is None:
                    _log.warning("equipment id %s not found", equip_id)
                    continue
                elevators = self._elevators.get(complex_id)
                if elevators is None:
                    _log.warning("complex id %s not found", complex_id)
                    continue
                match = next((e for e in elevators if e.id == equip_id), None)
                if match is None:
                    _log.warning("(complex, equip) (%s, %s) not found", complex_id, equip_id)
                    continue
                match.outage = Outage.from_record(record)

    def get(self, complex_id: Any) -> list[Elevator] | None:
        """Copies of the complex's equipment, or None if it has none."""
        with self._lock:
            elevators = self._elevators.get(complex_id)
            return [e.copy() for e in elevators] if elevators is not None else None

    def get_summary(self) -> ElevatorSummary:
        with self._lock:
            if self._summary is None:
                ids = dict.fromkeys(
                    e.complex_id
                    for els in self._elevators.values()
                    for e in els
                    if e.outage is not None
                )
                self._summary = ElevatorSummary(tuple(ids))
            return self._summary