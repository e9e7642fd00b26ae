"""
Date adjustment functions for schedule generation.
"""

from datetime import date, datetime, timedelta
from typing import Union

from ratecurve.conventions.calendars import Calendar
from ratecurve.conventions.types import BusinessDayAdjustment


def adjust_date(
    dt: Union[date, datetime], adjustment: BusinessDayAdjustment, calendar: Calendar
) -> date:
    """Apply business day adjustment to a date."""
    if isinstance(dt, datetime):
        dt = dt.date()

    if adjustment == BusinessDayAdjustment.NO_ADJUSTMENT:
        return dt
    if adjustment == BusinessDayAdjustment.FOLLOWING:
        return calendar.following(dt)
    if adjustment == BusinessDayAdjustment.PRECEDING:
        return calendar.preceding(dt)
    if adjustment == BusinessDayAdjustment.MODIFIED_FOLLOWING:
        adjusted = calendar.following(dt)
        # rolled into next month: go back instead
        if adjusted.month != dt.month:
            adjusted = calendar.preceding(dt)
        return adjusted
    if adjustment == BusinessDayAdjustment.MODIFIED_PRECEDING:
        adjusted = calendar.preceding(dt)
        if adjusted.month != dt.month:
            adjusted = calendar.following(dt)
        return adjusted

    raise ValueError(f"Unknown business day adjustment: {adjustment}")


def get_month_end(year: int, month: int) -> date:
    """Last calendar day of a given month."""
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)
    return next_month - timedelta(days=1)


def is_end_of_month(dt: date) -> bool:
    return dt == get_month_end(dt.year, dt.month)


def add_months(dt: Union[date, datetime], months: int, end_of_month: bool = False) -> date:
    """
    Shift a date by a number of months.

    Days that do not exist in the target month are clipped to its last day.
    With ``end_of_month`` set, a month-end start date stays on month-ends.
    """
    if isinstance(dt, datetime):
        dt = dt.date()

    total = dt.year * 12 + (dt.month - 1) + months
    year, month = divmod(total, 12)
    month += 1

    last_day = get_month_end(year, month)
    if end_of_month and is_end_of_month(dt):
        return last_day
    return date(year, month, min(dt.day, last_day.day))
