"""Timestamps, service dates and trip origin times."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_DAY_HUNDREDTHS = 24 * 60 * 100
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")


def _parse_int(text: str, *, signed: bool) -> int:
    pattern = _SIGNED_INT if signed else _UNSIGNED_INT
    if not pattern.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


@dataclass(frozen=True, order=True)
class Timestamp:
    """A point in time, held in UTC."""

    utc: datetime

    def __post_init__(self) -> None:
        if self.utc.tzinfo is None:
            raise ValueError("Timestamp needs an aware datetime")
        if self.utc.utcoffset() != timedelta(0):
            object.__setattr__(self, "utc", self.utc.astimezone(timezone.utc))

    @classmethod
    def now(cls) -> Timestamp:
        return cls(datetime.now(timezone.utc))

    @classmethod
    def epoch(cls) -> Timestamp:
        return cls(_EPOCH)

    @classmethod
    def from_unix(cls, unix: int) -> Timestamp:
        return cls(_EPOCH + timedelta(seconds=int(unix)))

    @classmethod
    def from_yyyymmdd(cls, text: str) -> Timestamp:
        """Parse a ``YYYYMMDD`` date into midnight UTC of that day."""
        if len(text) < 6 or not text.isascii():
            raise ValueError(f"Malformed yyyymmdd `{text}`")
        y = _parse_int(text[0:4], signed=True)
        m = _parse_int(text[4:6], signed=False)
        d = _parse_int(text[6:], signed=False)
        try:
            day = date(y, m, d)
        except ValueError as exc:
            raise ValueError(f"bad date {y}/{m}/{d} in {text}") from exc
        return cls(datetime(day.year, day.month, day.day, tzinfo=timezone.utc))

    @classmethod
    def from_naive(cls, naive: datetime) -> Timestamp:
        """Treat a naive datetime as UTC."""
        return cls(naive.replace(tzinfo=timezone.utc))

    @classmethod
    def from_utc(cls, dt: datetime) -> Timestamp:
        return cls(dt)

    def as_unix_utc(self) -> int:
        seconds = (self.utc - _EPOCH) // timedelta(seconds=1)
        return seconds % (1 << 64)

    def ms_since_epoch(self) -> int:
        return (self.utc - _EPOCH) // timedelta(milliseconds=1)

    def as_utc(self) -> datetime:
        return self.utc

    def plus(self, delta: timedelta) -> Timestamp:
        return Timestamp(self.utc + delta)

    def time(self) -> str:
        return self.utc.strftime("%H:%M:%S")

    def seconds_since(self, earlier: Timestamp) -> int:
        """Whole seconds from ``earlier`` to this one, truncated toward zero."""
        micros = (self.utc - earlier.utc) // timedelta(microseconds=1)
        whole = abs(micros) // 1_000_000
        return whole if micros >= 0 else -whole

    def date(self) -> Date:
        return Date(self.utc.date())

    def __add__(self, delta):
        if not isinstance(delta, timedelta):
            return NotImplemented
        return Timestamp(self.utc + delta)

    def __sub__(self, other):
        if isinstance(other, Timestamp):
            diff = self.utc - other.utc
            if diff < timedelta(0):
                raise ValueError("cannot subtract a later timestamp from an earlier one")
            return diff
        if isinstance(other, timedelta):
            return Timestamp(self.utc - other)
        return NotImplemented

    def __str__(self) -> str:
        local = self.utc.astimezone()
        today = datetime.now(timezone.utc).date()
        clock = local.strftime("%H:%M" if local.second == 0 else "%H:%M:%S")
        if local.date() == today:
            return clock
        if local.year == today.year:
            return f"{local.strftime('%m/%d')} {clock}"
        return f"{local.strftime('%Y-%m-%d')} {clock}"


@dataclass(frozen=True)
class Date:
    """A service day."""

    naive: date

    @classmethod
    def make(cls, year: int, month: int, day: int) -> Date:
        return cls(date(year, month, day))

    def to_naive(self) -> date:
        return self.naive

    def __add__(self, time):
        if not isinstance(time, Time):
            return NotImplemented
        try:
            day = self.naive + timedelta(days=time.offset)
        except OverflowError:
            day = date(1970, 1, 1)
        try:
            moment = datetime(day.year, day.month, day.day, time.h, time.m, time.s)
        except ValueError:
            moment = datetime(1970, 1, 1)
        return Timestamp.from_naive(moment)

    def __str__(self) -> str:
        return f"{self.naive.year}-{self.naive.month}-{self.naive.day}"


def _to_u8(value: float, what: str) -> int:
    whole = 0 if not value > 0 else int(value)
    if whole > 255:
        raise ValueError(f"{what}: {whole} out of range")
    return whole


@dataclass(frozen=True, order=True)
class Time:
    """A time of day with a day offset (-1, 0 or +1 relative to the service day)."""

    h: int
    m: int
    s: int
    offset: int = 0

    def __post_init__(self) -> None:
        for name in ("h", "m", "s"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} out of range: {value}")
        if not -128 <= self.offset <= 127:
            raise ValueError(f"offset out of range: {self.offset}")

    @classmethod
    def from_trip_origin(cls, text: str) -> Time:
        """Parse hundredths of a minute past midnight; may be negative or past a day."""
        n = _parse_int(text, signed=True)
        if not -(2**31) <= n < 2**31:
            raise ValueError(f"trip origin out of range: {text}")
        if n < 0:
            n_norm, offset = n + _DAY_HUNDREDTHS, -1
        elif n >= _DAY_HUNDREDTHS:
            n_norm, offset = n - _DAY_HUNDREDTHS, 1
        else:
            n_norm, offset = n, 0
        mins_total = float(n_norm) / 100.0
        hrs = mins_total / 60.0
        mins = math.fmod(mins_total, 60.0)
        secs = (mins_total - math.trunc(mins_total)) * 60.0
        return cls(
            _to_u8(hrs, "hours"),
            _to_u8(mins, "mins"),
            _to_u8(secs, "secs"),
            offset,
        )

    def secs_since_last_midnight(self) -> int:
        """Seconds since the midnight before the service day."""
        if self.offset < -1:
            raise ValueError(f"offset below -1: {self.offset}")
        days = 1 + self.offset
        return ((days * 24 + self.h) * 60 + self.m) * 60 + self.s

    def __sub__(self, other):
        """Seconds from this time forward to ``other``; ``other`` must not be earlier."""
        if not isinstance(other, Time):
            return NotImplemented
        a = self.secs_since_last_midnight()
        b = other.secs_since_last_midnight()
        if b < a:
            raise ValueError(f"{other} is earlier than {self}")
        return b - a

    def __str__(self) -> str:
        text = f"{self.h:02}:{self.m:02}:{self.s:02}"
        if self.offset > 0:
            return f"{text} +{self.offset}"
        if self.offset < 0:
            return f"{text} {self.offset}"
        return text