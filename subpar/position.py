"""Vehicle position reports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .ids import StopId
from .timestamp import Timestamp
from .trip import TripId


class PositionStatus(Enum):
    """Where a vehicle is relative to its reported stop."""

    NOTHING = 0
    AT = 1
    NEAR = 2
    EN_ROUTE = 3

    @classmethod
    def from_code(cls, code: int) -> PositionStatus:
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"bad position status {code}") from None

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    PositionStatus.NOTHING: "Nothing",
    PositionStatus.AT: "At",
    PositionStatus.NEAR: "Near",
    PositionStatus.EN_ROUTE: "EnRoute",
}


@dataclass(frozen=True)
class Position:
    """A vehicle's reported position on a trip."""

    trip: TripId
    stop: StopId
    stop_n: int | None
    status: PositionStatus
    time: Timestamp

    def __str__(self) -> str:
        text = f"{self.time} {self.trip} \t{self.stop!r}"
        if self.stop_n is not None:
            text += f" #{self.stop_n}"
        if self.status is not PositionStatus.NOTHING:
            text += f" '{self.status.label}'"
        return text