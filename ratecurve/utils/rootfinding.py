"""Bracketed one-dimensional root finders (Brent, bisection, safeguarded Newton)."""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

Func = Callable[[float], float]

MACHINE_EPSILON = sys.float_info.epsilon


@dataclass
class RootResult:
    root: float
    iterations: int
    evaluations: int
    converged: bool
    method: str


class RootFindingError(RuntimeError):
    """Raised when root-finding fails to converge."""


class _BudgetedFunction:
    """Wraps the objective and enforces the evaluation budget."""

    def __init__(self, func: Func, max_evaluations: int):
        self.func = func
        self.max_evaluations = max_evaluations
        self.evaluations = 0

    def __call__(self, x: float) -> float:
        if self.evaluations >= self.max_evaluations:
            raise RootFindingError(
                f"Maximum number of function evaluations ({self.max_evaluations}) exceeded"
            )
        self.evaluations += 1
        return self.func(x)


def _sign(a: float, b: float) -> float:
    return abs(a) if b >= 0.0 else -abs(a)


def _check_bracket(
    func: _BudgetedFunction, lower: float, upper: float, method: str
) -> Tuple[Optional[RootResult], float, float]:
    if not lower < upper:
        raise RootFindingError(f"Invalid bracket: lower {lower} >= upper {upper}")
    f_lower = func(lower)
    if f_lower == 0.0:
        return RootResult(lower, 0, func.evaluations, True, method), f_lower, 0.0
    f_upper = func(upper)
    if f_upper == 0.0:
        return RootResult(upper, 0, func.evaluations, True, method), f_lower, f_upper
    if math.isnan(f_lower) or math.isnan(f_upper):
        raise RootFindingError(f"Objective is NaN at the bracket [{lower}, {upper}]")
    if f_lower * f_upper > 0:
        raise RootFindingError(
            f"Root not bracketed: f({lower})={f_lower}, f({upper})={f_upper}"
        )
    return None, f_lower, f_upper


def bisect(
    func: Func,
    lower: float,
    upper: float,
    accuracy: float = 1e-12,
    max_evaluations: int = 100,
) -> RootResult:
    """Plain bisection; stops once the bracket is narrower than ``accuracy``."""
    counted = _BudgetedFunction(func, max_evaluations)
    early, f_lower, _ = _check_bracket(counted, lower, upper, "bisect")
    if early is not None:
        return early

    # orient so that f(x_neg) < 0
    if f_lower < 0:
        x_neg, dx = lower, upper - lower
    else:
        x_neg, dx = upper, lower - upper

    iteration = 0
    while True:
        iteration += 1
        dx *= 0.5
        mid = x_neg + dx
        f_mid = counted(mid)
        if f_mid <= 0.0:
            x_neg = mid
        if abs(dx) < accuracy or f_mid == 0.0:
            return RootResult(mid, iteration, counted.evaluations, True, "bisect")


def brent(
    func: Func,
    guess: float,
    lower: float,
    upper: float,
    accuracy: float = 1e-12,
    max_evaluations: int = 100,
) -> RootResult:
    """Brent's method on a bracket, started from ``guess``.

    Combines inverse quadratic interpolation, secant steps and bisection.
    Converges when the half-width of the bracket around the best estimate drops
    below ``2*eps*|root| + accuracy/2``.
    """
    if not lower < guess < upper:
        raise RootFindingError(
            f"Guess {guess} not strictly inside the bracket [{lower}, {upper}]"
        )
    counted = _BudgetedFunction(func, max_evaluations)
    early, f_min, f_max = _check_bracket(counted, lower, upper, "brent")
    if early is not None:
        return early

    x_min, x_max = lower, upper
    root = guess
    f_root = counted(root)

    # keep the root bracketed between root and x_max
    if f_root * f_min < 0:
        x_max, f_max = x_min, f_min
    else:
        x_min, f_min = x_max, f_max
    d = root - x_max
    e = d

    iteration = 0
    while True:
        iteration += 1
        if (f_root > 0.0 and f_max > 0.0) or (f_root < 0.0 and f_max < 0.0):
            x_max, f_max = x_min, f_min
            e = d = root - x_min
        if abs(f_max) < abs(f_root):
            x_min, root, x_max = root, x_max, root
            f_min, f_root, f_max = f_root, f_max, f_root

        tol = 2.0 * MACHINE_EPSILON * abs(root) + 0.5 * accuracy
        x_mid = (x_max - root) / 2.0
        if abs(x_mid) <= tol or f_root == 0.0:
            logger.debug(
                "Brent converged: root=%s iterations=%s evaluations=%s",
                root, iteration, counted.evaluations,
            )
            return RootResult(root, iteration, counted.evaluations, True, "brent")

        if abs(e) >= tol and abs(f_min) > abs(f_root):
            s = f_root / f_min
            if x_min == x_max:
                p = 2.0 * x_mid * s
                q = 1.0 - s
            else:
                q = f_min / f_max
                r = f_root / f_max
                p = s * (2.0 * x_mid * q * (q - r) - (root - x_min) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0.0:
                q = -q
            p = abs(p)
            min1 = 3.0 * x_mid * q - abs(tol * q)
            min2 = abs(e * q)
            if 2.0 * p < min(min1, min2):
                e = d
                d = p / q
            else:
                d = x_mid
                e = d
        else:
            d = x_mid
            e = d

        x_min, f_min = root, f_root
        if abs(d) > tol:
            root += d
        else:
            root += _sign(tol, x_mid)
        f_root = counted(root)


def newton_safe(
    func: Func,
    guess: float,
    lower: float,
    upper: float,
    accuracy: float = 1e-12,
    max_evaluations: int = 100,
    bump: float = 1e-7,
) -> RootResult:
    """Newton-Raphson kept inside the bracket, falling back to bisection.

    The derivative is a forward finite difference, so each Newton step costs
    two evaluations.
    """
    if not lower <= guess <= upper:
        raise RootFindingError(
            f"Guess {guess} outside the bracket [{lower}, {upper}]"
        )
    counted = _BudgetedFunction(func, max_evaluations)
    early, f_lower, _ = _check_bracket(counted, lower, upper, "newton")
    if early is not None:
        return early

    if f_lower < 0:
        x_l, x_h = lower, upper
    else:
        x_l, x_h = upper, lower

    def value_and_derivative(x: float) -> Tuple[float, float]:
        h = bump * max(1.0, abs(x))
        fx = counted(x)
        return fx, (counted(x + h) - fx) / h

    root = guess
    dx_old = upper - lower
    dx = dx_old
    f_root, df = value_and_derivative(root)

    iteration = 0
    while True:
        iteration += 1
        newton_out_of_range = ((root - x_h) * df - f_root) * ((root - x_l) * df - f_root) > 0.0
        if newton_out_of_range or abs(2.0 * f_root) > abs(dx_old * df):
            dx_old = dx
            dx = (x_h - x_l) / 2.0
            root = x_l + dx
        else:
            dx_old = dx
            dx = f_root / df
            root -= dx
        if abs(dx) < accuracy:
            logger.debug("Newton converged: root=%s iterations=%s", root, iteration)
            return RootResult(root, iteration, counted.evaluations, True, "newton")
        f_root, df = value_and_derivative(root)
        if f_root == 0.0:
            return RootResult(root, iteration, counted.evaluations, True, "newton")
        if f_root < 0:
            x_l = root
        else:
            x_h = root
