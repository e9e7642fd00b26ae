"""
Natural cubic spline interpolation.
"""
from typing import Sequence

import numpy as np

from .base import Interpolator


class CubicSplineInterpolator(Interpolator):
    """Natural cubic spline (zero second derivative at both ends).

    Every pillar affects every segment, so curves bootstrapped on it need
    repeated passes until the node values stop moving. Outside the pillars
    the polynomial of the nearest segment is used.
    """

    is_global = True

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        x, y = self.pillars, self.values
        n = len(x)
        h = np.diff(x)

        second = np.zeros(n)
        if n > 2:
            system = np.zeros((n - 2, n - 2))
            rhs = np.zeros(n - 2)
            for k in range(1, n - 1):
                row = k - 1
                if row > 0:
                    system[row, row - 1] = h[k - 1]
                system[row, row] = 2.0 * (h[k - 1] + h[k])
                if row < n - 3:
                    system[row, row + 1] = h[k]
                rhs[row] = 6.0 * ((y[k + 1] - y[k]) / h[k] - (y[k] - y[k - 1]) / h[k - 1])
            second[1:-1] = np.linalg.solve(system, rhs)

        # coefficients of a + b*s + c*s^2 + d*s^3 with s = t - x_i
        self.a = y[:-1].copy()
        self.b = (y[1:] - y[:-1]) / h - h * (2.0 * second[:-1] + second[1:]) / 6.0
        self.c = second[:-1] / 2.0
        self.d = (second[1:] - second[:-1]) / (6.0 * h)

        increments = self._segment_integral(np.arange(n - 1), h)
        self._primitive_at = np.concatenate(([0.0], np.cumsum(increments)))

    def _segment_integral(self, i, s):
        return s * (self.a[i] + s * (self.b[i] / 2.0 + s * (self.c[i] / 3.0 + s * self.d[i] / 4.0)))

    def _value(self, t: float) -> float:
        i = self._segment(t)
        s = t - self.pillars[i]
        return self.a[i] + s * (self.b[i] + s * (self.c[i] + s * self.d[i]))

    def _primitive(self, t: float) -> float:
        i = self._segment(t)
        return self._primitive_at[i] + self._segment_integral(i, t - self.pillars[i])

    def _derivative(self, t: float) -> float:
        i = self._segment(t)
        s = t - self.pillars[i]
        return self.b[i] + s * (2.0 * self.c[i] + 3.0 * s * self.d[i])
