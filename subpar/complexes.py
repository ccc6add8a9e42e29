"""Static station complex metadata."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .ids import Route, StopId

_log = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    """Turn a record value into something JSON can hold."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    return value


@dataclass
class ComplexMeta:
    """Name, accessibility, location, routes, stops and entrances of a complex."""

    name: str
    ada: Any
    ada_notes: str | None
    coord: tuple[float, float]
    routes: list[Route]
    stops: list[StopId]
    entrances: list[Any] = field(default_factory=list)

    @classmethod
    def from_info(cls, info: Mapping[str, Any]) -> ComplexMeta:
        """Build from a complex record with keys ``stop_name``, ``ada``,
        ``ada_notes``, ``latitude``, ``longitude``, ``routes`` and ``stop_ids``."""
        return cls(
            name=info["stop_name"],
            ada=info["ada"],
            ada_notes=info.get("ada_notes"),
            coord=(float(info["latitude"]), float(info["longitude"])),
            routes=[Route(route) for route in info["routes"]],
            stops=[StopId(stop) for stop in info["stop_ids"]],
        )

    def copy(self) -> ComplexMeta:
        return replace(
            self,
            routes=list(self.routes),
            stops=list(self.stops),
            entrances=list(self.entrances),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "ada": _plain(self.ada),
            "ada_notes": self.ada_notes,
            "coord": [self.coord[0], self.coord[1]],
            "routes": [str(route) for route in self.routes],
            "stops": [str(stop) for stop in self.stops],
            "entrances": [_plain(entrance) for entrance in self.entrances],
        }


class ComplexStates:
    """Read-only lookup of complex metadata by complex id."""

    def __init__(
        self,
        complexes: Iterable[Mapping[str, Any]],
        entrances: Iterable[Mapping[str, Any]],
    ) -> None:
        self._meta: dict[Any, ComplexMeta] = {
            info["complex_id"]: ComplexMeta.from_info(info) for info in complexes
        }
        for entrance in entrances:
            complex_id = entrance["complex_id"]
            meta = self._meta.get(complex_id)
            if meta is None:
                _log.warning("subway entrance w/ unknown complex id %s", complex_id)
                continue
            meta.entrances.append(entrance)

    def get(self, complex_id: Any) -> ComplexMeta | None:
        """A copy of the complex's metadata, or None if it is unknown."""
        meta = self._meta.get(complex_id)
        return meta.copy() if meta is not None else None