"""
Exception hierarchy for curve construction.

Every error derives from :class:`CurveError` and from the builtin that plain
validation code would raise, so ``except ValueError`` keeps working for
configuration and quote problems and ``except RuntimeError`` for solver
failures.
"""


class CurveError(Exception):
    """Base class for all curve construction errors."""


class ConfigurationError(CurveError, ValueError):
    """Invalid bootstrap set-up, reported before any solving starts."""


class QuoteError(CurveError, ValueError):
    """A market or jump quote is missing, stale or outside its admissible range."""


class ConvergenceError(CurveError, RuntimeError):
    """A node could not be solved or the global passes did not settle."""


class DomainError(CurveError, ValueError):
    """A value falls outside the domain where it is economically meaningful."""


class ExtrapolationError(CurveError, ValueError):
    """A query falls outside the curve range and extrapolation is disabled."""
