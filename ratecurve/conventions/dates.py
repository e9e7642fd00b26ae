"""
Spot lag and tenor arithmetic.
"""

import re
from datetime import date, datetime, timedelta
from typing import Tuple, Union

from ratecurve.conventions.calendars import Calendar, get_calendar
from ratecurve.conventions.types import BusinessDayAdjustment
from ratecurve.errors import ConfigurationError
from ratecurve.schedule.adjustments import add_months, adjust_date

_TENOR_PATTERN = re.compile(r"^(\d+)([DWMY])$")


def parse_tenor(tenor: str) -> Tuple[int, str]:
    """Split a tenor string such as '3M' or '10Y' into (length, unit)."""
    match = _TENOR_PATTERN.match(tenor.upper().strip())
    if match is None:
        raise ConfigurationError(f"Unsupported tenor: {tenor}")
    return int(match.group(1)), match.group(2)


def tenor_to_months(tenor: str) -> int:
    """Convert a month or year tenor to months."""
    length, unit = parse_tenor(tenor)
    if unit == "M":
        return length
    if unit == "Y":
        return length * 12
    raise ConfigurationError(f"Tenor {tenor} is not expressed in months or years")


def get_spot_date(
    trade_date: Union[date, datetime],
    calendar: Union[str, Calendar] = "TARGET",
    spot_lag: int = 2,
) -> date:
    """Trade date moved forward by ``spot_lag`` business days."""
    if isinstance(trade_date, datetime):
        trade_date = trade_date.date()
    return get_calendar(calendar).add_business_days(trade_date, spot_lag)


def advance(
    start: date,
    tenor: str,
    calendar: Union[str, Calendar] = "TARGET",
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    end_of_month: bool = False,
) -> date:
    """
    Add a tenor to a start date and adjust the result.

    Day and week tenors use calendar-day arithmetic; month and year tenors use
    month arithmetic with the optional end-of-month rule.
    """
    cal = get_calendar(calendar)
    length, unit = parse_tenor(tenor)
    if unit == "D":
        unadjusted = start + timedelta(days=length)
    elif unit == "W":
        unadjusted = start + timedelta(weeks=length)
    else:
        unadjusted = add_months(start, tenor_to_months(tenor), end_of_month)
    return adjust_date(unadjusted, business_day_adjustment, cal)
