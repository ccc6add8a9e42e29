"""Short, length-limited string types.

A short string type only checks that its value fits into a fixed number
of UTF-8 bytes; otherwise it behaves exactly like ``str``.
"""

from __future__ import annotations

from typing import ClassVar


class ShortStringOverflow(ValueError):
    """Raised when a value is too long for a short string type."""

    def __init__(self, typename: str, payload: str) -> None:
        super().__init__(typename, payload)
        self.typename = typename
        self.payload = payload

    def __str__(self) -> str:
        return f"string too long for {self.typename} SSO type: '{self.payload}'"


class ShortString(str):
    """A ``str`` whose UTF-8 encoding is at most ``capacity`` bytes long.

    Concrete types are declared with a class keyword::

        class Route(ShortString, capacity=3): ...
    """

    capacity: ClassVar[int] = 0

    def __init_subclass__(cls, capacity: int | None = None, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if capacity is not None:
            if capacity < 0:
                raise ValueError("capacity must not be negative")
            cls.capacity = capacity

    def __new__(cls, value: str):
        if cls is ShortString:
            raise TypeError("ShortString must be subclassed with a capacity")
        if not isinstance(value, str):
            raise TypeError(f"{cls.__name__} needs a str, got {type(value).__name__}")
        if len(value.encode("utf-8")) > cls.capacity:
            raise ShortStringOverflow(cls.__name__, value)
        return super().__new__(cls, value)

    @classmethod
    def make(cls, value: str):
        """Build an instance, raising ShortStringOverflow if it does not fit."""
        return cls(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"