"""
Forward rate agreement helpers.
"""

from datetime import date
from typing import Optional

from ratecurve.errors import ConfigurationError
from ratecurve.quotes import QuoteLike

from .base import RateHelper
from .deposit import EURIBOR_DEPOSIT, DepositConvention, simple_forward


class FraRateHelper(RateHelper):
    """Forward rate agreement on a deposit starting ``months_to_start`` after spot."""

    def __init__(
        self,
        quote: QuoteLike,
        months_to_start: int,
        months_to_end: int,
        reference_date: date,
        convention: Optional[DepositConvention] = None,
        name: str = "",
    ):
        if months_to_end <= months_to_start:
            raise ConfigurationError(
                f"FRA end ({months_to_end}M) must come after its start ({months_to_start}M)"
            )
        super().__init__(quote, name or f"FRA {months_to_start}x{months_to_end}")
        self.convention = convention or EURIBOR_DEPOSIT

        spot = self.convention.spot_date(reference_date)
        self.start_date = self.convention.advance(spot, f"{months_to_start}M")
        self.maturity_date = self.convention.advance(spot, f"{months_to_end}M")
        self.year_fraction = self.convention.day_count.year_fraction(
            self.start_date, self.maturity_date
        )

    @property
    def earliest_date(self) -> date:
        return self.start_date

    @property
    def latest_date(self) -> date:
        return self.maturity_date

    def implied_quote(self, curve) -> float:
        return simple_forward(curve, self.start_date, self.maturity_date, self.year_fraction)
