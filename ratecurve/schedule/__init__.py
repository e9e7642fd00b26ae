"""Schedule generation for swap legs."""

from .adjustments import add_months, adjust_date, get_month_end, is_end_of_month
from .core import SchedulePeriod
from .generator import ScheduleGenerator

__all__ = [
    "SchedulePeriod",
    "ScheduleGenerator",
    "adjust_date",
    "add_months",
    "get_month_end",
    "is_end_of_month",
]
