"""Interest Rate Term Structure Bootstrapping.

This package builds yield curves whose nodes reprice a set of calibrating
instruments exactly, using an iterative bootstrap over configurable value
representations and interpolations.

Key modules:
- curves: Yield curves, value traits and the lazily bootstrapped piecewise curve
- bootstrap: Iterative bootstrap, node solvers and run reports
- instruments: Deposit, FRA and swap rate helpers
- interpolation: Interpolation methods on node values
- schedule: Payment schedule generation
- conventions: Market conventions and day count conventions
"""

from .bootstrap import BootstrapConfig, BootstrapReport, BootstrapState, IterativeBootstrap
from .curves import (
    CurveTrait,
    FlatForwardCurve,
    InterpolatedCurve,
    PiecewiseYieldCurve,
    YieldCurve,
)
from .errors import (
    ConfigurationError,
    ConvergenceError,
    CurveError,
    DomainError,
    ExtrapolationError,
    QuoteError,
)
from .instruments import DepositRateHelper, FraRateHelper, RateHelper, SwapRateHelper
from .interpolation import InterpolationMethod
from .quotes import SimpleQuote

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "BootstrapConfig",
    "BootstrapReport",
    "BootstrapState",
    "IterativeBootstrap",
    "CurveTrait",
    "FlatForwardCurve",
    "InterpolatedCurve",
    "PiecewiseYieldCurve",
    "YieldCurve",
    "InterpolationMethod",
    "RateHelper",
    "DepositRateHelper",
    "FraRateHelper",
    "SwapRateHelper",
    "SimpleQuote",
    "CurveError",
    "ConfigurationError",
    "QuoteError",
    "ConvergenceError",
    "DomainError",
    "ExtrapolationError",
]
