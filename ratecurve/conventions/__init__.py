"""Market conventions: day counts, calendars and date arithmetic."""

from .calendars import CALENDARS, Calendar, get_calendar
from .dates import advance, get_spot_date, parse_tenor, tenor_to_months
from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_ACT,
    THIRTY_360E,
    THIRTY_360U,
    DayCountConvention,
    get_day_count_convention,
)
from .types import BusinessDayAdjustment, Compounding, Frequency

__all__ = [
    "Calendar",
    "CALENDARS",
    "get_calendar",
    "DayCountConvention",
    "get_day_count_convention",
    "ACT_360",
    "ACT_365F",
    "ACT_ACT",
    "THIRTY_360E",
    "THIRTY_360U",
    "BusinessDayAdjustment",
    "Compounding",
    "Frequency",
    "advance",
    "get_spot_date",
    "parse_tenor",
    "tenor_to_months",
]
