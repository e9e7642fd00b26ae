"""
Piecewise constant (step function) interpolation.
"""
from typing import Sequence

import numpy as np

from .base import Interpolator


class BackwardFlatInterpolator(Interpolator):
    """Step function taking the value of the right pillar on (x_i, x_i+1].

    Used for instantaneous forwards that are constant up to each maturity.
    """

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        dx = np.diff(self.pillars)
        self._primitive_at = np.concatenate(([0.0], np.cumsum(dx * self.values[1:])))

    def _left_segment(self, t: float) -> int:
        i = int(np.searchsorted(self.pillars, t, side="left")) - 1
        return min(max(i, 0), len(self.pillars) - 2)

    def _value(self, t: float) -> float:
        if t <= self.pillars[0]:
            return self.values[0]
        return self.values[self._left_segment(t) + 1]

    def _primitive(self, t: float) -> float:
        i = self._left_segment(t)
        return self._primitive_at[i] + (t - self.pillars[i]) * self.values[i + 1]

    def _derivative(self, t: float) -> float:
        return 0.0


class ForwardFlatInterpolator(Interpolator):
    """Step function taking the value of the left pillar on [x_i, x_i+1)."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        dx = np.diff(self.pillars)
        self._primitive_at = np.concatenate(([0.0], np.cumsum(dx * self.values[:-1])))

    def _value(self, t: float) -> float:
        if t >= self.pillars[-1]:
            return self.values[-1]
        return self.values[self._segment(t)]

    def _primitive(self, t: float) -> float:
        if t >= self.pillars[-1]:
            return self._primitive_at[-1] + (t - self.pillars[-1]) * self.values[-1]
        i = self._segment(t)
        return self._primitive_at[i] + (t - self.pillars[i]) * self.values[i]

    def _derivative(self, t: float) -> float:
        return 0.0
