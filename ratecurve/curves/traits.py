"""
Value traits: what the curve nodes hold and how the bootstrap brackets them.

A trait is a stateless policy. It tells the bootstrap the value pinned at the
reference date, where to start the search for each node, which interval the
node may take, and how the interpolated node values map to discount factors.
"""

import math
import sys
from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Sequence, Union

import numpy as np

from ratecurve.errors import ConfigurationError

if TYPE_CHECKING:
    from ratecurve.curves.interpolated import InterpolatedCurve
    from ratecurve.interpolation.base import Interpolator

AVG_RATE = 0.05
MAX_RATE = 1.0


class ValueTrait(ABC):
    """Policy for one representation of the curve node values."""

    name = ""

    def __init__(self, allow_negative_rates: bool = False):
        self.allow_negative_rates = allow_negative_rates

    def initial_date(self, curve: "InterpolatedCurve") -> date:
        return curve.reference_date

    @abstractmethod
    def initial_value(self, curve: "InterpolatedCurve") -> float:
        """Value held by node 0."""

    @abstractmethod
    def initial_guess(self) -> float:
        """Placeholder for unsolved nodes before the first pass."""

    @abstractmethod
    def guess(self, curve: "InterpolatedCurve", i: int, valid_data: bool) -> float:
        pass

    @abstractmethod
    def min_value_after(
        self, i: int, data: Sequence[float], times: Sequence[float], valid_data: bool
    ) -> float:
        pass

    @abstractmethod
    def max_value_after(
        self, i: int, data: Sequence[float], times: Sequence[float], valid_data: bool
    ) -> float:
        pass

    def update_guess(self, data: np.ndarray, value: float, i: int) -> None:
        data[i] = value

    @abstractmethod
    def dummy_initial_value(self) -> bool:
        """True when node 0 is not a market constraint and follows node 1."""

    def max_iterations(self) -> int:
        return 100

    @abstractmethod
    def discount(self, interpolation: "Interpolator", t: float) -> float:
        pass

    @abstractmethod
    def instantaneous_forward(self, interpolation: "Interpolator", t: float) -> float:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(allow_negative_rates={self.allow_negative_rates})"


class Discount(ValueTrait):
    """Nodes hold discount factors; node 0 is pinned at 1."""

    name = "DISCOUNT"

    def initial_value(self, curve):
        return 1.0

    def initial_guess(self):
        return 1.0

    def guess(self, curve, i, valid_data):
        data = curve.data
        times = curve.times
        if valid_data:
            return float(data[i])
        if i == 1:
            return 1.0 / (1.0 + AVG_RATE * times[1])
        # flat zero rate carried forward from the previous node
        r = -math.log(data[i - 1]) / times[i - 1]
        return math.exp(-r * times[i])

    def min_value_after(self, i, data, times, valid_data):
        if valid_data:
            return float(min(data)) / 2.0
        dt = times[i] - times[i - 1]
        return data[i - 1] * math.exp(-MAX_RATE * dt)

    def max_value_after(self, i, data, times, valid_data):
        if self.allow_negative_rates:
            dt = times[i] - times[i - 1]
            return data[i - 1] * math.exp(MAX_RATE * dt)
        # discount factors are non-increasing without negative rates
        return float(data[i - 1])

    def dummy_initial_value(self):
        return False

    def discount(self, interpolation, t):
        return interpolation(t, allow_extrapolation=True)

    def instantaneous_forward(self, interpolation, t):
        return -interpolation.derivative(t, allow_extrapolation=True) / interpolation(
            t, allow_extrapolation=True
        )


class _RateTrait(ValueTrait):
    """Shared bracketing for traits whose nodes are continuously compounded rates."""

    def initial_value(self, curve):
        return AVG_RATE

    def initial_guess(self):
        return AVG_RATE

    def update_guess(self, data, value, i):
        data[i] = value
        if i == 1:
            # node 0 is a dummy and follows the first solved rate
            data[0] = value

    def min_value_after(self, i, data, times, valid_data):
        if valid_data:
            r = float(min(data))
            return 2.0 * r if r < 0.0 else r / 2.0
        if self.allow_negative_rates:
            return -MAX_RATE
        return sys.float_info.epsilon

    def max_value_after(self, i, data, times, valid_data):
        if valid_data:
            r = float(max(data))
            return r / 2.0 if r < 0.0 else 2.0 * r
        return MAX_RATE

    def dummy_initial_value(self):
        return True


class ZeroYield(_RateTrait):
    """Nodes hold continuously compounded zero rates."""

    name = "ZERO_YIELD"

    def guess(self, curve, i, valid_data):
        if valid_data:
            return float(curve.data[i])
        if i == 1:
            return AVG_RATE
        return curve.zero_rate(curve.dates[i], extrapolate=True)

    def discount(self, interpolation, t):
        return math.exp(-interpolation(t, allow_extrapolation=True) * t)

    def instantaneous_forward(self, interpolation, t):
        return interpolation(t, allow_extrapolation=True) + t * interpolation.derivative(
            t, allow_extrapolation=True
        )


class ForwardRate(_RateTrait):
    """Nodes hold instantaneous forward rates, integrated to discount factors."""

    name = "FORWARD_RATE"

    def guess(self, curve, i, valid_data):
        if valid_data:
            return float(curve.data[i])
        if i == 1:
            return AVG_RATE
        return curve.instantaneous_forward(curve.dates[i], extrapolate=True)

    def discount(self, interpolation, t):
        return math.exp(-interpolation.primitive(t, allow_extrapolation=True))

    def instantaneous_forward(self, interpolation, t):
        return interpolation(t, allow_extrapolation=True)


class CurveTrait(Enum):
    DISCOUNT = "DISCOUNT"
    ZERO_YIELD = "ZERO_YIELD"
    FORWARD_RATE = "FORWARD_RATE"


_TRAITS = {
    CurveTrait.DISCOUNT: Discount,
    CurveTrait.ZERO_YIELD: ZeroYield,
    CurveTrait.FORWARD_RATE: ForwardRate,
}


def create_trait(
    trait: Union[str, CurveTrait, ValueTrait], allow_negative_rates: bool = False
) -> ValueTrait:
    """Resolve a trait from an enum member or name; trait instances pass through."""
    if isinstance(trait, ValueTrait):
        return trait
    if isinstance(trait, str):
        key = trait.upper().strip()
        if key not in CurveTrait.__members__:
            raise ConfigurationError(
                f"Unknown curve trait: {trait}. Available: {list(CurveTrait.__members__)}"
            )
        trait = CurveTrait[key]
    return _TRAITS[trait](allow_negative_rates=allow_negative_rates)
