"""A batch of updates decoded from one feed message."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union

from .position import Position
from .schedule import Schedule
from .timestamp import Timestamp


@dataclass(frozen=True)
class Alert:
    """A service alert; its contents are not kept."""


Update = Union[Alert, Position, Schedule]


@dataclass
class Batch:
    """Updates from one feed message; entries that failed to decode are kept as exceptions."""

    time: Timestamp
    msgs: list[Update | Exception] = field(default_factory=list)

    def schedules(self) -> Iterator[Schedule]:
        """The successfully decoded schedules, in feed order."""
        return (msg for msg in self.msgs if isinstance(msg, Schedule))