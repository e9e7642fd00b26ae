"""
Backward schedule generation for swap legs.
"""

from datetime import date, datetime
from typing import List, Union

from ratecurve.conventions.calendars import Calendar, get_calendar
from ratecurve.conventions.daycount import DayCountConvention, get_day_count_convention
from ratecurve.conventions.types import BusinessDayAdjustment, Frequency
from ratecurve.errors import ConfigurationError

from .adjustments import add_months, adjust_date
from .core import SchedulePeriod


class ScheduleGenerator:
    """Generates leg schedules rolling backward from maturity.

    Unadjusted dates are measured from the maturity date (never chained from the
    previous period) so month-end clipping does not drift. An irregular period,
    if any, is a short stub at the front.
    """

    def __init__(
        self,
        calendar: Union[str, Calendar] = "TARGET",
        business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        end_of_month: bool = False,
    ):
        self.calendar = get_calendar(calendar)
        self.business_day_adjustment = business_day_adjustment
        self.end_of_month = end_of_month

    def _adjust(self, dt: date) -> date:
        return adjust_date(dt, self.business_day_adjustment, self.calendar)

    def unadjusted_dates(
        self, effective_date: date, maturity_date: date, frequency: Frequency
    ) -> List[date]:
        dates = [maturity_date]
        step = 1
        while True:
            candidate = add_months(
                maturity_date, -step * frequency.months(), self.end_of_month
            )
            if candidate <= effective_date:
                break
            dates.append(candidate)
            step += 1
        dates.append(effective_date)
        dates.reverse()
        return dates

    def generate_schedule(
        self,
        effective_date: Union[date, datetime],
        maturity_date: Union[date, datetime],
        frequency: Frequency,
        day_count: Union[str, DayCountConvention],
    ) -> List[SchedulePeriod]:
        """
        Build the accrual periods of a leg.

        Args:
            effective_date: Start date of the leg (unadjusted)
            maturity_date: End date of the leg (unadjusted)
            frequency: Payment frequency
            day_count: Day count convention for year fractions

        Returns:
            List of schedule periods with adjusted dates
        """
        if isinstance(effective_date, datetime):
            effective_date = effective_date.date()
        if isinstance(maturity_date, datetime):
            maturity_date = maturity_date.date()
        if effective_date >= maturity_date:
            raise ConfigurationError("Effective date must be before maturity date")

        dc = get_day_count_convention(day_count)
        unadj = self.unadjusted_dates(effective_date, maturity_date, frequency)
        adjusted = [self._adjust(d) for d in unadj]

        periods = []
        for i in range(len(adjusted) - 1):
            start, end = adjusted[i], adjusted[i + 1]
            # first period is a stub when it is not a full regular step back
            is_stub = i == 0 and unadj[0] != add_months(
                unadj[1], -frequency.months(), self.end_of_month
            )
            periods.append(
                SchedulePeriod(
                    accrual_start=start,
                    accrual_end=end,
                    payment_date=end,
                    year_fraction=dc.year_fraction(start, end),
                    is_stub=is_stub,
                )
            )
        return periods
