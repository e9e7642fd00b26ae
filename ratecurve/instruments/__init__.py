"""Calibrating instruments (rate helpers)."""

from .base import RateHelper
from .deposit import ESTR_DEPOSIT, EURIBOR_DEPOSIT, DepositConvention, DepositRateHelper
from .fra import FraRateHelper
from .swap import (
    EUR_FIXED_ANNUAL,
    EURIBOR_3M_FLOATING,
    EURIBOR_6M_FLOATING,
    SwapLegConvention,
    SwapRateHelper,
)

__all__ = [
    "RateHelper",
    "DepositConvention",
    "DepositRateHelper",
    "FraRateHelper",
    "SwapLegConvention",
    "SwapRateHelper",
    "EURIBOR_DEPOSIT",
    "ESTR_DEPOSIT",
    "EUR_FIXED_ANNUAL",
    "EURIBOR_3M_FLOATING",
    "EURIBOR_6M_FLOATING",
]
