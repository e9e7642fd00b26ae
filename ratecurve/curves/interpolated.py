"""
Curve defined by interpolated node values.

This is the container the bootstrap fills in. Node 0 sits at the reference
date; the remaining nodes sit at the helpers' pillar dates. What the node
values mean (discount factors, zero rates, forwards) is decided by the trait.
"""

from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ratecurve.conventions.daycount import DayCountConvention
from ratecurve.errors import ConfigurationError, CurveError, QuoteError
from ratecurve.interpolation import (
    InterpolationMethod,
    Interpolator,
    create_interpolator,
    get_interpolation_method,
)
from ratecurve.quotes import QuoteLike, SimpleQuote, as_quote

from .base import YieldCurve
from .traits import CurveTrait, ValueTrait, create_trait


def turn_of_year_dates(reference_date: date, count: int) -> List[date]:
    """31 December of the reference year and of each following year."""
    return [date(reference_date.year + k, 12, 31) for k in range(count)]


class InterpolatedCurve(YieldCurve):
    """Yield curve on interpolated node values, with optional discount jumps."""

    def __init__(
        self,
        reference_date: Union[date, datetime],
        trait: Union[str, CurveTrait, ValueTrait] = CurveTrait.DISCOUNT,
        interpolation: Union[str, InterpolationMethod] = InterpolationMethod.LOG_LINEAR,
        day_count: Union[str, DayCountConvention] = "ACT/365F",
        jumps: Sequence[QuoteLike] = (),
        jump_dates: Sequence[date] = (),
        name: str = "",
        allow_extrapolation: bool = False,
    ):
        super().__init__(reference_date, day_count, name, allow_extrapolation)
        self.trait = create_trait(trait)
        self.interpolation_method = get_interpolation_method(interpolation)

        self._dates: List[date] = [self.reference_date]
        self._times = np.array([0.0])
        self._data = np.array([self.trait.initial_value(self)], dtype=float)
        self._n_points: Optional[int] = None
        self._interpolation: Optional[Interpolator] = None
        self._frozen = False

        self._jumps, self._jump_dates = self._setup_jumps(jumps, jump_dates)
        self._jump_times = [self.time_from_reference(d) for d in self._jump_dates]

    def _setup_jumps(
        self, jumps: Sequence[QuoteLike], jump_dates: Sequence[date]
    ) -> Tuple[List[SimpleQuote], List[date]]:
        quotes = [as_quote(j) for j in jumps]
        if not quotes:
            if jump_dates:
                raise ConfigurationError(
                    f"{len(jump_dates)} jump dates given without jump quotes"
                )
            return [], []
        if not jump_dates:
            return quotes, turn_of_year_dates(self.reference_date, len(quotes))
        if len(jump_dates) != len(quotes):
            raise ConfigurationError(
                f"Mismatch between number of jumps ({len(quotes)}) "
                f"and jump dates ({len(jump_dates)})"
            )
        return quotes, list(jump_dates)

    # ------------------------------------------------------------------
    # Node access
    # ------------------------------------------------------------------
    @property
    def dates(self) -> Tuple[date, ...]:
        return tuple(self._dates)

    @property
    def times(self) -> np.ndarray:
        return self._times.copy()

    @property
    def data(self) -> np.ndarray:
        return self._data.copy()

    def nodes(self) -> List[Tuple[date, float]]:
        return [(d, float(v)) for d, v in zip(self._dates, self._data)]

    @property
    def jumps(self) -> List[SimpleQuote]:
        return list(self._jumps)

    @property
    def jump_dates(self) -> List[date]:
        return list(self._jump_dates)

    @property
    def max_date(self) -> date:
        return self._dates[-1]

    @property
    def max_time(self) -> float:
        return float(self._times[-1])

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Mutation (bootstrap only)
    # ------------------------------------------------------------------
    def _check_mutable(self) -> None:
        if self._frozen:
            raise CurveError(f"{self} is frozen and cannot be modified")

    def set_nodes(
        self, dates: Sequence[date], times: Sequence[float], data: Sequence[float]
    ) -> None:
        self._check_mutable()
        if not (len(dates) == len(times) == len(data)):
            raise ConfigurationError("Node dates, times and data must have the same length")
        if dates[0] != self.reference_date or times[0] != 0.0:
            raise ConfigurationError("First node must sit at the reference date")
        times_arr = np.asarray(times, dtype=float)
        if np.any(np.diff(times_arr) <= 0.0):
            raise ConfigurationError("Node times must be strictly increasing")
        self._dates = list(dates)
        self._times = times_arr
        self._data = np.array(data, dtype=float)
        self._n_points = None
        self._interpolation = None

    def set_node_value(self, i: int, value: float) -> None:
        """Write a node value through the trait (which may also move node 0)."""
        self._check_mutable()
        self.trait.update_guess(self._data, value, i)
        self._interpolation = None

    def rebuild_interpolation(self, n_points: Optional[int] = None) -> None:
        """Interpolate on the first ``n_points`` nodes (all nodes when None)."""
        self._check_mutable()
        self._n_points = n_points
        self._interpolation = None

    @property
    def interpolation(self) -> Interpolator:
        if self._interpolation is None:
            n = len(self._times) if self._n_points is None else self._n_points
            if n < 2:
                raise CurveError(f"{self} has no nodes beyond the reference date")
            interp = create_interpolator(
                self.interpolation_method, self._times[:n], self._data[:n]
            )
            # range checks are done by the curve against max_date
            interp.enable_extrapolation()
            self._interpolation = interp
        return self._interpolation

    def freeze(self) -> "InterpolatedCurve":
        """Build the full interpolation and make the curve read-only."""
        self._n_points = None
        self._interpolation = None
        _ = self.interpolation
        self._frozen = True
        return self

    def copy(self) -> "InterpolatedCurve":
        """Mutable copy sharing trait, conventions and jump quotes."""
        clone = InterpolatedCurve(
            self.reference_date,
            trait=self.trait,
            interpolation=self.interpolation_method,
            day_count=self.day_count,
            jumps=self._jumps,
            jump_dates=self._jump_dates,
            name=self.name,
            allow_extrapolation=self.allows_extrapolation,
        )
        if len(self._dates) > 1:
            clone.set_nodes(self._dates, self._times, self._data)
        return clone

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def jump_effect(self, t: float) -> float:
        """Product of the jump quotes falling in (0, t]."""
        effect = 1.0
        for quote, jump_time in zip(self._jumps, self._jump_times):
            if 0.0 < jump_time <= t:
                if not quote.is_valid():
                    raise QuoteError(f"Invalid jump quote: {quote}")
                value = quote.value
                if not 0.0 < value <= 1.0:
                    raise QuoteError(f"Invalid jump value: {value}")
                effect *= value
        return effect

    def _discount_impl(self, t: float) -> float:
        df = self.trait.discount(self.interpolation, t)
        if self._jumps:
            df *= self.jump_effect(t)
        return df

    def _forward_impl(self, t: float) -> float:
        return self.trait.instantaneous_forward(self.interpolation, t)

    def __repr__(self) -> str:
        return (
            f"InterpolatedCurve(reference_date={self.reference_date}, "
            f"trait={self.trait.name}, interpolation={self.interpolation_method.value}, "
            f"nodes={len(self._dates)})"
        )
