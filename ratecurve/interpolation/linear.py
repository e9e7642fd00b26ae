"""
Linear and log-linear interpolation.
"""
import math
from typing import Sequence

import numpy as np

from ratecurve.errors import DomainError

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation; extrapolates along the first and last segments."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        dx = np.diff(self.pillars)
        self.slopes = np.diff(self.values) / dx
        # running integral at each pillar
        self._primitive_at = np.concatenate(
            ([0.0], np.cumsum(dx * (self.values[:-1] + self.values[1:]) / 2.0))
        )

    def _value(self, t: float) -> float:
        i = self._segment(t)
        return self.values[i] + self.slopes[i] * (t - self.pillars[i])

    def _primitive(self, t: float) -> float:
        i = self._segment(t)
        dx = t - self.pillars[i]
        return self._primitive_at[i] + dx * (self.values[i] + 0.5 * self.slopes[i] * dx)

    def _derivative(self, t: float) -> float:
        return self.slopes[self._segment(t)]


class LogLinearInterpolator(Interpolator):
    """Linear interpolation on the logarithm of the values.

    On discount factors this gives piecewise constant forward rates
    (the usual "step forward" curve). All values must be positive.
    """

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        if np.any(self.values <= 0.0):
            raise DomainError("Log-linear interpolation requires positive values")
        self.log_values = np.log(self.values)
        dx = np.diff(self.pillars)
        self.log_slopes = np.diff(self.log_values) / dx

        increments = [
            self._segment_integral(i, dx[i]) for i in range(len(dx))
        ]
        self._primitive_at = np.concatenate(([0.0], np.cumsum(increments)))

    def _segment_integral(self, i: int, dx: float) -> float:
        b = self.log_slopes[i]
        if abs(b * dx) < 1e-12:
            return self.values[i] * dx
        return self.values[i] * math.expm1(b * dx) / b

    def _value(self, t: float) -> float:
        i = self._segment(t)
        return math.exp(self.log_values[i] + self.log_slopes[i] * (t - self.pillars[i]))

    def _primitive(self, t: float) -> float:
        i = self._segment(t)
        return self._primitive_at[i] + self._segment_integral(i, t - self.pillars[i])

    def _derivative(self, t: float) -> float:
        i = self._segment(t)
        return self._value(t) * self.log_slopes[i]
