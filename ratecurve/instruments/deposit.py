"""
Deposit rate helpers.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from ratecurve.conventions.calendars import Calendar, get_calendar
from ratecurve.conventions.dates import advance
from ratecurve.conventions.daycount import (
    ACT_360,
    DayCountConvention,
    get_day_count_convention,
)
from ratecurve.conventions.types import BusinessDayAdjustment
from ratecurve.errors import ConfigurationError
from ratecurve.quotes import QuoteLike

from .base import RateHelper


@dataclass
class DepositConvention:
    """Specification for a deposit/cash instrument convention."""

    day_count: Union[str, DayCountConvention] = ACT_360
    settlement_days: int = 2
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING
    calendar: Union[str, Calendar] = "TARGET"
    end_of_month: bool = False
    _calendar_obj: Calendar = field(init=False, repr=False)

    def __post_init__(self):
        self.day_count = get_day_count_convention(self.day_count)
        self._calendar_obj = get_calendar(self.calendar)
        if self.settlement_days < 0:
            raise ConfigurationError(
                f"Settlement days must be non-negative: {self.settlement_days}"
            )

    @property
    def calendar_obj(self) -> Calendar:
        """Get the actual calendar object."""
        return self._calendar_obj

    def spot_date(self, reference_date: date) -> date:
        return self._calendar_obj.add_business_days(reference_date, self.settlement_days)

    def advance(self, start: date, tenor: str) -> date:
        return advance(
            start,
            tenor,
            self._calendar_obj,
            self.business_day_adjustment,
            self.end_of_month,
        )


EURIBOR_DEPOSIT = DepositConvention(
    day_count=ACT_360,
    settlement_days=2,
    business_day_adjustment=BusinessDayAdjustment.MODIFIED_FOLLOWING,
    calendar="TARGET",
)

ESTR_DEPOSIT = DepositConvention(
    day_count=ACT_360,
    settlement_days=1,  # T+1 for overnight deposits
    business_day_adjustment=BusinessDayAdjustment.FOLLOWING,
    calendar="TARGET",
)


def simple_forward(curve, start: date, end: date, tau: float) -> float:
    return (curve.discount(start) / curve.discount(end) - 1.0) / tau


class DepositRateHelper(RateHelper):
    """Money-market deposit quoted as a simple rate from spot to maturity."""

    def __init__(
        self,
        quote: QuoteLike,
        tenor: str,
        reference_date: date,
        convention: Optional[DepositConvention] = None,
        name: str = "",
    ):
        super().__init__(quote, name or f"DEPOSIT {tenor.upper().strip()}")
        self.tenor = tenor.upper().strip()
        self.convention = convention or EURIBOR_DEPOSIT

        self.start_date = self.convention.spot_date(reference_date)
        self.maturity_date = self.convention.advance(self.start_date, self.tenor)
        self.year_fraction = self.convention.day_count.year_fraction(
            self.start_date, self.maturity_date
        )
        if self.year_fraction <= 0:
            raise ConfigurationError(f"Non-positive accrual period for {self.name}")

    @property
    def earliest_date(self) -> date:
        return self.start_date

    @property
    def latest_date(self) -> date:
        return self.maturity_date

    def implied_quote(self, curve) -> float:
        return simple_forward(curve, self.start_date, self.maturity_date, self.year_fraction)
