"""
Base yield curve class.

Times are year fractions from the reference date under the curve's own day
count; every query accepts either a date or a time.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional, Union

from ratecurve.conventions.daycount import DayCountConvention, get_day_count_convention
from ratecurve.conventions.types import Compounding, Frequency
from ratecurve.errors import DomainError, ExtrapolationError

from .rates import rate_from_compound_factor, zero_rate_from_discount

TimeLike = Union[date, datetime, float, int]

_TIME_TOLERANCE = 1e-12
# step used when a rate is requested at (or around) a single instant
_DT = 1e-4


class YieldCurve(ABC):
    """Base implementation for yield curves."""

    def __init__(
        self,
        reference_date: date,
        day_count: Union[str, DayCountConvention] = "ACT/365F",
        name: str = "",
        allow_extrapolation: bool = False,
    ):
        """
        Initialize base curve.

        Args:
            reference_date: Curve reference/valuation date (time zero)
            day_count: Day-count convention converting dates to curve times
            name: Optional curve name for identification
            allow_extrapolation: Permit queries beyond the last node
        """
        if isinstance(reference_date, datetime):
            reference_date = reference_date.date()
        self._reference_date = reference_date
        self.day_count = get_day_count_convention(day_count)
        self.name = name
        self._allow_extrapolation = allow_extrapolation

    @property
    def reference_date(self) -> date:
        return self._reference_date

    def time_from_reference(self, dt: TimeLike) -> float:
        """Convert a date (or pass through a time) to the curve's time axis."""
        if isinstance(dt, (int, float)):
            return float(dt)
        return self.day_count.year_fraction(self.reference_date, dt)

    @property
    @abstractmethod
    def max_date(self) -> date:
        """Latest date for which the curve returns values without extrapolating."""

    @property
    def max_time(self) -> float:
        return self.time_from_reference(self.max_date)

    def enable_extrapolation(self) -> None:
        self._allow_extrapolation = True

    def disable_extrapolation(self) -> None:
        self._allow_extrapolation = False

    @property
    def allows_extrapolation(self) -> bool:
        return self._allow_extrapolation

    def _check_range(self, t: float, extrapolate: bool) -> None:
        if t < 0.0:
            raise ExtrapolationError(f"Negative time ({t}) given to {self}")
        if extrapolate or self._allow_extrapolation:
            return
        max_time = self.max_time
        if t > max_time + _TIME_TOLERANCE * max(1.0, max_time):
            raise ExtrapolationError(
                f"Time ({t}) is past max curve time ({max_time}) of {self}"
            )

    @abstractmethod
    def _discount_impl(self, t: float) -> float:
        """Discount factor at time t; range already checked."""

    def discount(self, t: TimeLike, extrapolate: bool = False) -> float:
        """Discount factor for a date or time."""
        time = self.time_from_reference(t)
        self._check_range(time, extrapolate)
        return self._discount_impl(time)

    def zero_rate(
        self,
        t: TimeLike,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        extrapolate: bool = False,
    ) -> float:
        """Zero rate to a date or time; at time zero the rate over a short step is used."""
        time = self.time_from_reference(t)
        self._check_range(time, extrapolate)
        if time == 0.0:
            time = _DT
            self._check_range(time, extrapolate)
        return zero_rate_from_discount(self._discount_impl(time), time, compounding, frequency)

    def forward_rate(
        self,
        start: TimeLike,
        end: TimeLike,
        compounding: Compounding = Compounding.SIMPLE,
        frequency: Frequency = Frequency.ANNUAL,
        day_count: Optional[Union[str, DayCountConvention]] = None,
        extrapolate: bool = False,
    ) -> float:
        """
        Forward rate between two dates or times.

        The accrual fraction uses ``day_count`` when both ends are dates and one
        is given, and the curve's own time axis otherwise.
        """
        t1 = self.time_from_reference(start)
        t2 = self.time_from_reference(end)
        if t2 <= t1:
            raise DomainError(f"Forward period must be positive: [{t1}, {t2}]")
        self._check_range(t2, extrapolate)
        self._check_range(t1, extrapolate)

        if day_count is not None and not isinstance(start, (int, float)) and not isinstance(end, (int, float)):
            tau = get_day_count_convention(day_count).year_fraction(start, end)
        else:
            tau = t2 - t1
        factor = self._discount_impl(t1) / self._discount_impl(t2)
        return rate_from_compound_factor(factor, tau, compounding, frequency)

    def instantaneous_forward(self, t: TimeLike, extrapolate: bool = False) -> float:
        """Continuously compounded instantaneous forward rate."""
        time = self.time_from_reference(t)
        self._check_range(time, extrapolate)
        return self._forward_impl(time)

    def _forward_impl(self, t: float) -> float:
        t1 = max(t - _DT / 2.0, 0.0)
        t2 = t1 + _DT
        return -math.log(self._discount_impl(t2) / self._discount_impl(t1)) / _DT

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.name})"
            if self.name
            else self.__class__.__name__
        )
