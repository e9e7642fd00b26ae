"""
Factory functions and utilities for creating interpolators.
"""
from enum import Enum
from typing import Dict, Sequence, Type, Union

from ratecurve.errors import ConfigurationError

from .base import Interpolator
from .cubic import CubicSplineInterpolator
from .flat import BackwardFlatInterpolator, ForwardFlatInterpolator
from .linear import LinearInterpolator, LogLinearInterpolator


class InterpolationMethod(Enum):
    LINEAR = "LINEAR"
    LOG_LINEAR = "LOG_LINEAR"
    BACKWARD_FLAT = "BACKWARD_FLAT"
    FORWARD_FLAT = "FORWARD_FLAT"
    CUBIC_SPLINE = "CUBIC_SPLINE"


_INTERPOLATORS: Dict[InterpolationMethod, Type[Interpolator]] = {
    InterpolationMethod.LINEAR: LinearInterpolator,
    InterpolationMethod.LOG_LINEAR: LogLinearInterpolator,
    InterpolationMethod.BACKWARD_FLAT: BackwardFlatInterpolator,
    InterpolationMethod.FORWARD_FLAT: ForwardFlatInterpolator,
    InterpolationMethod.CUBIC_SPLINE: CubicSplineInterpolator,
}

_ALIASES: Dict[str, InterpolationMethod] = {
    "LINEAR_DF": InterpolationMethod.LINEAR,
    "LOGLINEAR": InterpolationMethod.LOG_LINEAR,
    "STEP_FORWARD": InterpolationMethod.LOG_LINEAR,
    "STEP_FORWARD_CONTINUOUS": InterpolationMethod.LOG_LINEAR,
    "PIECEWISE_CONSTANT": InterpolationMethod.FORWARD_FLAT,
    "CUBIC": InterpolationMethod.CUBIC_SPLINE,
    "NATURAL_CUBIC": InterpolationMethod.CUBIC_SPLINE,
}


def get_interpolation_method(method: Union[str, InterpolationMethod]) -> InterpolationMethod:
    """Resolve an interpolation method by name or alias."""
    if isinstance(method, InterpolationMethod):
        return method
    method_upper = method.upper().strip()
    if method_upper in InterpolationMethod.__members__:
        return InterpolationMethod[method_upper]
    if method_upper in _ALIASES:
        return _ALIASES[method_upper]
    raise ConfigurationError(
        f"Unknown interpolation method: {method}. "
        f"Available: {', '.join(m.value for m in InterpolationMethod)}"
    )


def create_interpolator(
    method: Union[str, InterpolationMethod],
    pillars: Sequence[float],
    values: Sequence[float],
) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method (enum member, name or alias)
        pillars: Time points
        values: Values to interpolate

    Returns:
        Configured interpolator
    """
    return _INTERPOLATORS[get_interpolation_method(method)](pillars, values)


def is_global(method: Union[str, InterpolationMethod]) -> bool:
    return _INTERPOLATORS[get_interpolation_method(method)].is_global
