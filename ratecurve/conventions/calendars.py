"""
QuantLib-backed business day calendars.
"""

from datetime import date, timedelta
from typing import Dict, Union

import QuantLib as ql

from ratecurve.errors import ConfigurationError

from .daycount import DateLike, from_ql_date, to_date, to_ql_date


class Calendar:
    """Business-day calendar delegating holiday rules to QuantLib."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: DateLike) -> bool:
        return self._ql_calendar.isBusinessDay(to_ql_date(dt))

    def is_holiday(self, dt: DateLike) -> bool:
        return self._ql_calendar.isHoliday(to_ql_date(dt))

    def add_business_days(self, start_date: DateLike, days: int) -> date:
        """Move forward (or backward, for negative ``days``) by business days."""
        if days == 0:
            return to_date(start_date)
        ql_result = self._ql_calendar.advance(to_ql_date(start_date), days, ql.Days)
        return from_ql_date(ql_result)

    def following(self, dt: DateLike) -> date:
        current = to_date(dt)
        while not self.is_business_day(current):
            current += timedelta(days=1)
        return current

    def preceding(self, dt: DateLike) -> date:
        current = to_date(dt)
        while not self.is_business_day(current):
            current -= timedelta(days=1)
        return current

    def __repr__(self) -> str:
        return f"Calendar({self.name!r})"


TARGET = Calendar("TARGET", ql.TARGET())
WEEKEND_ONLY = Calendar("WEEKEND", ql.WeekendsOnly())
NULL_CALENDAR = Calendar("NULL", ql.NullCalendar())
USNY = Calendar("USNY", ql.UnitedStates(ql.UnitedStates.GovernmentBond))
UK = Calendar("UK", ql.UnitedKingdom())

CALENDARS: Dict[str, Calendar] = {
    "TARGET": TARGET,
    "EUR": TARGET,
    "WEEKEND": WEEKEND_ONLY,
    "NULL": NULL_CALENDAR,
    "USNY": USNY,
    "UK": UK,
}


def get_calendar(calendar: Union[str, Calendar]) -> Calendar:
    """Resolve a calendar by name; calendar objects pass through."""
    if isinstance(calendar, Calendar):
        return calendar
    name = calendar.upper().strip()
    if name not in CALENDARS:
        raise ConfigurationError(
            f"Unknown calendar: {calendar}. Available: {sorted(CALENDARS)}"
        )
    return CALENDARS[name]
