import math

from ratecurve.quotes import SimpleQuote, as_quote


def test_version_bumps_only_on_change():
    quote = SimpleQuote(0.02)
    assert quote.version == 0

    assert quote.set_value(0.025) == 0.025 - 0.02
    assert quote.version == 1

    quote.set_value(0.025)
    assert quote.version == 1


def test_validity():
    assert SimpleQuote(0.01).is_valid()
    assert not SimpleQuote().is_valid()
    assert not SimpleQuote(math.nan).is_valid()
    assert not SimpleQuote(math.inf).is_valid()

    quote = SimpleQuote(0.01)
    quote.reset()
    assert not quote.is_valid()
    assert quote.version == 1


def test_as_quote_wraps_numbers_and_passes_quotes_through():
    quote = SimpleQuote(0.03)
    assert as_quote(quote) is quote
    wrapped = as_quote(0.04)
    assert isinstance(wrapped, SimpleQuote)
    assert wrapped.value == 0.04
