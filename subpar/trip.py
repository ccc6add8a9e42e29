"""Trip identifiers and the parts encoded in them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from .ids import Route, TripIdStr
from .timestamp import Date, Time, Timestamp


class TripDir(Enum):
    """Direction of travel; north also stands for east."""

    NORTH = "N"
    SOUTH = "S"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TripParts:
    """Route, direction and origin time decoded from a trip id."""

    rt: Route
    dir: TripDir
    time: Time

    @classmethod
    def parse(cls, text: str) -> TripParts:
        """Decode ``<origin>_<route>.<tail>``, e.g. ``134200_L..N``."""
        under = text.find("_")
        dot = text.find(".")
        if under < 0 or dot < 0:
            raise ValueError(f"parse trip parts '{text}': trip parts missing delimiter(s)")
        if under >= dot:
            raise ValueError(f"parse trip parts '{text}': trip parts out of order")
        origin, route, tail = text[:under], text[under + 1 : dot], text[dot:]
        if ".N" in tail:
            direction = TripDir.NORTH
        elif ".S" in tail:
            direction = TripDir.SOUTH
        else:
            raise ValueError(f"no clue what to make of this trip tail {tail}")
        try:
            rt = Route(route)
        except ValueError as exc:
            raise ValueError(f"trip parts: {exc}") from exc
        try:
            time = Time.from_trip_origin(origin)
        except ValueError as exc:
            raise ValueError(f"trip origin: {exc}") from exc
        return cls(rt=rt, dir=direction, time=time)


@dataclass(frozen=True)
class TripId:
    """A trip id together with its decoded parts and service day."""

    text: TripIdStr
    data: TripParts
    day: Date

    @classmethod
    def parse(cls, text: str, day: Date) -> TripId:
        try:
            data = TripParts.parse(text)
        except ValueError as exc:
            raise ValueError(f"tokenize {text}: {exc}") from exc
        try:
            raw = TripIdStr(text)
        except ValueError as exc:
            raise ValueError(f"copy trip_id {text}: {exc}") from exc
        return cls(text=raw, data=data, day=day)

    @classmethod
    def default(cls) -> TripId:
        return cls(
            text=TripIdStr("000000_0..N"),
            data=TripParts(rt=Route("0"), dir=TripDir.NORTH, time=Time(0, 0, 0)),
            day=Date.make(2020, 1, 1),
        )

    def name(self) -> TripIdStr:
        return self.text

    def route(self) -> Route:
        return self.data.rt

    def dir(self) -> TripDir:
        return self.data.dir

    def date(self):
        """The service day as a ``datetime.date``."""
        return self.day.to_naive()

    def departed(self) -> Timestamp:
        return self.day + self.data.time

    def origin(self) -> Timestamp:
        """The origin time in UTC, with the day offset applied."""
        t = self.data.time
        day = self.date() + timedelta(days=t.offset)
        return Timestamp(datetime(day.year, day.month, day.day, t.h, t.m, t.s, tzinfo=timezone.utc))

    def __str__(self) -> str:
        parts = self.data
        day = self.date()
        text = f"{parts.rt}{parts.dir} ("
        if day != datetime.now(timezone.utc).date():
            text += f"{day.strftime('%m-%d')} "
        return f"{text}{parts.time})"