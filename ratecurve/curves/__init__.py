"""Yield curves: base class, traits, interpolated and bootstrapped curves."""

from .base import YieldCurve
from .flat import FlatForwardCurve
from .interpolated import InterpolatedCurve, turn_of_year_dates
from .piecewise import PiecewiseYieldCurve
from .rates import (
    compound_factor,
    discount_factor,
    rate_from_compound_factor,
    zero_rate_from_discount,
)
from .traits import (
    AVG_RATE,
    MAX_RATE,
    CurveTrait,
    Discount,
    ForwardRate,
    ValueTrait,
    ZeroYield,
    create_trait,
)

__all__ = [
    "YieldCurve",
    "FlatForwardCurve",
    "InterpolatedCurve",
    "PiecewiseYieldCurve",
    "turn_of_year_dates",
    "ValueTrait",
    "Discount",
    "ZeroYield",
    "ForwardRate",
    "CurveTrait",
    "create_trait",
    "AVG_RATE",
    "MAX_RATE",
    "compound_factor",
    "discount_factor",
    "rate_from_compound_factor",
    "zero_rate_from_discount",
]
