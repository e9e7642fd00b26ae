"""
Flat forward curve.
"""

import math
from datetime import date, datetime
from typing import Union

from ratecurve.conventions.daycount import DayCountConvention
from ratecurve.conventions.types import Compounding, Frequency
from ratecurve.errors import QuoteError
from ratecurve.quotes import QuoteLike, as_quote

from .base import YieldCurve
from .rates import compound_factor

# latest date QuantLib day counters accept
_MAX_DATE = date(2199, 12, 31)


class FlatForwardCurve(YieldCurve):
    """Curve with a single rate at every maturity.

    The rate is read from its quote on every query, so a discounting curve
    built on a :class:`SimpleQuote` follows the quote.
    """

    def __init__(
        self,
        reference_date: Union[date, datetime],
        rate: QuoteLike,
        day_count: Union[str, DayCountConvention] = "ACT/365F",
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        name: str = "",
    ):
        super().__init__(reference_date, day_count, name, allow_extrapolation=True)
        self.rate = as_quote(rate)
        self.compounding = compounding
        self.frequency = frequency

    @property
    def max_date(self) -> date:
        return _MAX_DATE

    @property
    def max_time(self) -> float:
        return math.inf

    def _continuous_rate(self) -> float:
        if not self.rate.is_valid():
            raise QuoteError(f"Invalid flat rate quote: {self.rate}")
        if self.compounding == Compounding.CONTINUOUS:
            return self.rate.value
        # equivalent continuous rate over one year
        return math.log(compound_factor(self.rate.value, 1.0, self.compounding, self.frequency))

    def _discount_impl(self, t: float) -> float:
        return math.exp(-self._continuous_rate() * t)

    def _forward_impl(self, t: float) -> float:
        return self._continuous_rate()
