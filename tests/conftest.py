from __future__ import annotations

from datetime import date

import pytest

from ratecurve.conventions.types import Frequency
from ratecurve.instruments import (
    DepositConvention,
    DepositRateHelper,
    SwapLegConvention,
    SwapRateHelper,
)

# NULL calendar: every day is a business day, so dates are predictable
CASH = DepositConvention(day_count="ACT/360", settlement_days=0, calendar="NULL")
FIXED_LEG = SwapLegConvention(day_count="30E/360", frequency=Frequency.ANNUAL, calendar="NULL")
FLOATING_LEG = SwapLegConvention(
    day_count="ACT/360", frequency=Frequency.SEMIANNUAL, calendar="NULL"
)

DEPOSIT_QUOTES = {"3M": 0.0200, "6M": 0.0215, "1Y": 0.0250}
SWAP_QUOTES = {"2Y": 0.0265, "3Y": 0.0275, "5Y": 0.0290, "7Y": 0.0300, "10Y": 0.0310}


@pytest.fixture(scope="session")
def reference_date() -> date:
    return date(2024, 1, 2)


@pytest.fixture
def make_deposit(reference_date):
    def _make(tenor: str, rate, ref: date | None = None) -> DepositRateHelper:
        return DepositRateHelper(rate, tenor, ref or reference_date, CASH)

    return _make


@pytest.fixture
def make_swap(reference_date):
    def _make(tenor: str, rate, discount_curve=None) -> SwapRateHelper:
        return SwapRateHelper(
            rate,
            tenor,
            reference_date,
            fixed_leg=FIXED_LEG,
            floating_leg=FLOATING_LEG,
            settlement_days=0,
            calendar="NULL",
            discount_curve=discount_curve,
        )

    return _make


@pytest.fixture
def two_deposits(make_deposit):
    return [make_deposit("3M", 0.0200), make_deposit("1Y", 0.0250)]


@pytest.fixture
def market_helpers(make_deposit, make_swap):
    deposits = [make_deposit(t, q) for t, q in DEPOSIT_QUOTES.items()]
    swaps = [make_swap(t, q) for t, q in SWAP_QUOTES.items()]
    return deposits + swaps
