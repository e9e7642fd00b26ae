"""
Core data structures for schedule generation.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SchedulePeriod:
    """A single accrual period of a swap leg."""

    accrual_start: date
    accrual_end: date
    payment_date: date
    year_fraction: float
    is_stub: bool = False

    @property
    def accrual_days(self) -> int:
        """Number of calendar days in accrual period."""
        return (self.accrual_end - self.accrual_start).days
