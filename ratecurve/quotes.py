"""
Observable market quotes.

A :class:`SimpleQuote` carries a version counter that is bumped on every
change. Curves remember the versions they were built from and compare them on
the next query, so a changed quote triggers a recomputation without any
notification wiring.
"""

from __future__ import annotations

import math
from typing import Optional, Union


class SimpleQuote:
    """Mutable market value with change tracking."""

    def __init__(self, value: Optional[float] = None):
        self._value = None if value is None else float(value)
        self._version = 0

    @property
    def value(self) -> Optional[float]:
        return self._value

    @property
    def version(self) -> int:
        return self._version

    def set_value(self, value: Optional[float]) -> float:
        """Set a new value and return the difference to the previous one."""
        new_value = None if value is None else float(value)
        diff = 0.0
        if self._value is not None and new_value is not None:
            diff = new_value - self._value
        if new_value != self._value:
            self._value = new_value
            self._version += 1
        return diff

    def reset(self) -> None:
        """Invalidate the quote."""
        self.set_value(None)

    def is_valid(self) -> bool:
        return self._value is not None and math.isfinite(self._value)

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value!r})"


QuoteLike = Union[SimpleQuote, float, int]


def as_quote(value: QuoteLike) -> SimpleQuote:
    """Wrap plain numbers into a :class:`SimpleQuote`; quotes pass through."""
    if isinstance(value, SimpleQuote):
        return value
    return SimpleQuote(value)
