"""
Vanilla fixed/floating swap rate helper.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, List, Optional, Union

from ratecurve.conventions.calendars import Calendar, get_calendar
from ratecurve.conventions.dates import tenor_to_months
from ratecurve.conventions.daycount import (
    ACT_360,
    THIRTY_360E,
    DayCountConvention,
    get_day_count_convention,
)
from ratecurve.conventions.types import BusinessDayAdjustment, Frequency
from ratecurve.errors import ConfigurationError
from ratecurve.quotes import QuoteLike
from ratecurve.schedule import ScheduleGenerator, SchedulePeriod, add_months

from .base import RateHelper

if TYPE_CHECKING:
    from ratecurve.curves.base import YieldCurve


@dataclass
class SwapLegConvention:
    """Specification for a swap leg convention."""

    day_count: Union[str, DayCountConvention]
    frequency: Frequency
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING
    calendar: Union[str, Calendar] = "TARGET"
    end_of_month: bool = False
    _calendar_obj: Calendar = field(init=False, repr=False)

    def __post_init__(self):
        self.day_count = get_day_count_convention(self.day_count)
        self._calendar_obj = get_calendar(self.calendar)

    @property
    def calendar_obj(self) -> Calendar:
        """Get the actual calendar object."""
        return self._calendar_obj

    def schedule(self, effective_date: date, maturity_date: date) -> List[SchedulePeriod]:
        generator = ScheduleGenerator(
            self._calendar_obj, self.business_day_adjustment, self.end_of_month
        )
        return generator.generate_schedule(
            effective_date, maturity_date, self.frequency, self.day_count
        )


# Predefined leg conventions
EUR_FIXED_ANNUAL = SwapLegConvention(
    day_count=THIRTY_360E,
    frequency=Frequency.ANNUAL,
)

EURIBOR_6M_FLOATING = SwapLegConvention(
    day_count=ACT_360,
    frequency=Frequency.SEMIANNUAL,
)

EURIBOR_3M_FLOATING = SwapLegConvention(
    day_count=ACT_360,
    frequency=Frequency.QUARTERLY,
)


class SwapRateHelper(RateHelper):
    """
    Par swap rate of a spot-starting fixed/floating swap.

    The floating leg is forecast off the curve being built. Cash flows are
    discounted on ``discount_curve`` when one is given (e.g. an OIS curve),
    otherwise on the curve being built as well.
    """

    def __init__(
        self,
        quote: QuoteLike,
        tenor: str,
        reference_date: date,
        fixed_leg: Optional[SwapLegConvention] = None,
        floating_leg: Optional[SwapLegConvention] = None,
        settlement_days: int = 2,
        calendar: Union[str, Calendar] = "TARGET",
        discount_curve: Optional["YieldCurve"] = None,
        name: str = "",
    ):
        super().__init__(quote, name or f"SWAP {tenor.upper().strip()}")
        self.tenor = tenor.upper().strip()
        self.fixed_leg = fixed_leg or EUR_FIXED_ANNUAL
        self.floating_leg = floating_leg or EURIBOR_6M_FLOATING
        self.discount_curve = discount_curve

        if settlement_days < 0:
            raise ConfigurationError(f"Settlement days must be non-negative: {settlement_days}")
        self.spot_date = get_calendar(calendar).add_business_days(reference_date, settlement_days)
        # legs roll from the unadjusted maturity
        self.unadjusted_maturity = add_months(self.spot_date, tenor_to_months(self.tenor))

        self.fixed_periods = self.fixed_leg.schedule(self.spot_date, self.unadjusted_maturity)
        self.floating_periods = self.floating_leg.schedule(
            self.spot_date, self.unadjusted_maturity
        )

    @property
    def earliest_date(self) -> date:
        return self.spot_date

    @property
    def latest_date(self) -> date:
        return max(
            self.fixed_periods[-1].payment_date, self.floating_periods[-1].payment_date
        )

    @property
    def maturity_date(self) -> date:
        return self.fixed_periods[-1].accrual_end

    def annuity(self, discount_curve: "YieldCurve") -> float:
        """Fixed leg PV of one unit of rate."""
        return sum(
            p.year_fraction * discount_curve.discount(p.payment_date)
            for p in self.fixed_periods
        )

    def floating_leg_pv(self, forecast_curve: "YieldCurve", discount_curve: "YieldCurve") -> float:
        pv = 0.0
        for p in self.floating_periods:
            forward = (
                forecast_curve.discount(p.accrual_start) / forecast_curve.discount(p.accrual_end)
                - 1.0
            ) / p.year_fraction
            pv += p.year_fraction * forward * discount_curve.discount(p.payment_date)
        return pv

    def implied_quote(self, curve) -> float:
        discount_curve = self.discount_curve if self.discount_curve is not None else curve
        return self.floating_leg_pv(curve, discount_curve) / self.annuity(discount_curve)
