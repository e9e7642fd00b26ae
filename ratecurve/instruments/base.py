"""Common interface for calibrating instruments."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING

from ratecurve.errors import QuoteError
from ratecurve.quotes import QuoteLike, SimpleQuote, as_quote

if TYPE_CHECKING:
    from ratecurve.curves.base import YieldCurve


class RateHelper(ABC):
    """
    Instrument whose market quote the curve has to reproduce.

    The helper is valued on whatever curve it is handed; during a bootstrap
    that is the curve under construction.
    """

    def __init__(self, quote: QuoteLike, name: str = ""):
        self.quote: SimpleQuote = as_quote(quote)
        self.name = name

    @property
    @abstractmethod
    def earliest_date(self) -> date:
        """First date on which the instrument needs a discount factor."""

    @property
    @abstractmethod
    def latest_date(self) -> date:
        """Last date the instrument needs; it becomes the curve node."""

    @property
    def pillar_date(self) -> date:
        return self.latest_date

    def market_quote(self) -> float:
        if not self.quote.is_valid():
            raise QuoteError(f"Invalid market quote for {self}: {self.quote.value!r}")
        return self.quote.value

    @abstractmethod
    def implied_quote(self, curve: "YieldCurve") -> float:
        """Quote the instrument would have if priced off ``curve``."""

    def quote_error(self, curve: "YieldCurve") -> float:
        return self.implied_quote(curve) - self.market_quote()

    def __str__(self) -> str:
        label = self.name or type(self).__name__
        return f"{label}({self.latest_date})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(quote={self.quote.value!r}, "
            f"earliest={self.earliest_date}, latest={self.latest_date})"
        )
