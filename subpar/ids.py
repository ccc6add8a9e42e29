"""Identifier types for routes, stops and trips."""

from __future__ import annotations

from .shortstr import ShortString


class Route(ShortString, capacity=3):
    """Route letter without local/express-ness, e.g. '6' or 'SIR'."""


class StopId(ShortString, capacity=4):
    """A station (parent) or platform (child), e.g. '101' or '101N'."""

    def is_parent(self) -> bool:
        """True when the id ends with a direction letter 'N' or 'S'."""
        return self[-1:] in ("N", "S")

    def parent(self) -> StopId:
        """The id without its trailing direction letter, if it has one."""
        if self.is_parent():
            return type(self)(self[:-1])
        return self


class TripIdStr(ShortString, capacity=20):
    """A raw trip id, e.g. '028650_7..N'."""