"""
Interpolation methods for yield curves.

Every interpolator exposes the value, its derivative and its primitive
(integral from the first pillar), with extrapolation off unless enabled.
"""

# Base classes
from .base import Interpolator

# Spline interpolation
from .cubic import CubicSplineInterpolator

# Factory and utilities
from .factory import (
    InterpolationMethod,
    create_interpolator,
    get_interpolation_method,
    is_global,
)

# Step functions
from .flat import BackwardFlatInterpolator, ForwardFlatInterpolator

# Linear interpolation methods
from .linear import LinearInterpolator, LogLinearInterpolator

__all__ = [
    # Base classes
    'Interpolator',

    # Interpolation methods
    'LinearInterpolator',
    'LogLinearInterpolator',
    'BackwardFlatInterpolator',
    'ForwardFlatInterpolator',
    'CubicSplineInterpolator',

    # Factory and utilities
    'InterpolationMethod',
    'create_interpolator',
    'get_interpolation_method',
    'is_global',
]
