"""
Base classes for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from ratecurve.errors import ConfigurationError, ExtrapolationError

_RANGE_TOLERANCE = 1e-12


class Interpolator(ABC):
    """Base class for curve interpolation methods.

    Interpolators are built on strictly increasing abscissae and are immutable:
    a curve whose node values change builds a new interpolator.
    """

    #: True when every node influences every segment (e.g. cubic splines).
    is_global = False

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Initialize interpolator.

        Args:
            pillars: Time to maturity points (in years), strictly increasing
            values: Values to interpolate (discount factors, zero rates, etc.)
        """
        if len(pillars) != len(values):
            raise ConfigurationError("Pillars and values must have same length")
        if len(pillars) < 2:
            raise ConfigurationError("Need at least 2 points for interpolation")

        self.pillars = np.asarray(pillars, dtype=float)
        self.values = np.asarray(values, dtype=float)

        if np.any(np.diff(self.pillars) <= 0.0):
            raise ConfigurationError("Pillars must be strictly increasing")

        self._extrapolate = False

    @property
    def x_min(self) -> float:
        return float(self.pillars[0])

    @property
    def x_max(self) -> float:
        return float(self.pillars[-1])

    def enable_extrapolation(self) -> None:
        self._extrapolate = True

    def disable_extrapolation(self) -> None:
        self._extrapolate = False

    @property
    def allows_extrapolation(self) -> bool:
        return self._extrapolate

    def is_in_range(self, t: float) -> bool:
        tol = _RANGE_TOLERANCE * max(1.0, abs(self.x_max))
        return self.x_min - tol <= t <= self.x_max + tol

    def _check_range(self, t: float, allow_extrapolation: bool) -> None:
        if self._extrapolate or allow_extrapolation:
            return
        if not self.is_in_range(t):
            raise ExtrapolationError(
                f"Interpolation range is [{self.x_min}, {self.x_max}]: "
                f"extrapolation at {t} not allowed"
            )

    def _segment(self, t: float) -> int:
        """Index of the segment [x_i, x_i+1] used for t, clipped to the ends."""
        i = int(np.searchsorted(self.pillars, t, side="right")) - 1
        return min(max(i, 0), len(self.pillars) - 2)

    def __call__(self, t: float, allow_extrapolation: bool = False) -> float:
        self._check_range(t, allow_extrapolation)
        return float(self._value(t))

    def primitive(self, t: float, allow_extrapolation: bool = False) -> float:
        """Integral of the interpolant from the first pillar to t."""
        self._check_range(t, allow_extrapolation)
        return float(self._primitive(t))

    def derivative(self, t: float, allow_extrapolation: bool = False) -> float:
        self._check_range(t, allow_extrapolation)
        return float(self._derivative(t))

    def interpolate_many(self, times: Sequence[float]) -> np.ndarray:
        """Interpolate values at multiple times."""
        return np.array([self(t) for t in times])

    @abstractmethod
    def _value(self, t: float) -> float:
        """Interpolated value at t, extrapolating when outside the pillars."""

    @abstractmethod
    def _primitive(self, t: float) -> float:
        pass

    @abstractmethod
    def _derivative(self, t: float) -> float:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={len(self.pillars)})"
