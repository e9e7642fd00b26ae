"""
Conversions between interest rates, compound factors and discount factors.
"""

import math

from ratecurve.conventions.types import Compounding, Frequency
from ratecurve.errors import DomainError


def compound_factor(
    rate: float,
    t: float,
    compounding: Compounding = Compounding.CONTINUOUS,
    frequency: Frequency = Frequency.ANNUAL,
) -> float:
    """Growth of one unit invested at ``rate`` for ``t`` years."""
    if t < 0:
        raise DomainError(f"Negative time: {t}")
    if compounding == Compounding.SIMPLE:
        return 1.0 + rate * t
    if compounding == Compounding.COMPOUNDED:
        n = frequency.per_year()
        return (1.0 + rate / n) ** (n * t)
    return math.exp(rate * t)


def rate_from_compound_factor(
    factor: float,
    t: float,
    compounding: Compounding = Compounding.CONTINUOUS,
    frequency: Frequency = Frequency.ANNUAL,
) -> float:
    """Rate implied by a compound factor over ``t`` years."""
    if factor <= 0:
        raise DomainError(f"Non-positive compound factor: {factor}")
    if t <= 0:
        raise DomainError(f"Time must be positive: {t}")
    if compounding == Compounding.SIMPLE:
        return (factor - 1.0) / t
    if compounding == Compounding.COMPOUNDED:
        n = frequency.per_year()
        return n * (factor ** (1.0 / (n * t)) - 1.0)
    return math.log(factor) / t


def discount_factor(
    rate: float,
    t: float,
    compounding: Compounding = Compounding.CONTINUOUS,
    frequency: Frequency = Frequency.ANNUAL,
) -> float:
    return 1.0 / compound_factor(rate, t, compounding, frequency)


def zero_rate_from_discount(
    df: float,
    t: float,
    compounding: Compounding = Compounding.CONTINUOUS,
    frequency: Frequency = Frequency.ANNUAL,
) -> float:
    if df <= 0:
        raise DomainError(f"Non-positive discount factor: {df}")
    return rate_from_compound_factor(1.0 / df, t, compounding, frequency)
