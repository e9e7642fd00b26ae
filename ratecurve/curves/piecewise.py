"""
Piecewise yield curve bootstrapped lazily from rate helpers.

The curve remembers the quote versions it was last built from. Every query
compares them with the live quotes and re-bootstraps first if anything moved.
Each run works on a private copy; the published node set is frozen and only
replaced once a run converges, so readers never see a half-built curve and a
failed run leaves the previous curve in place.
"""

import logging
import threading
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ratecurve.bootstrap.base import Bootstrap, BootstrapConfig, BootstrapState
from ratecurve.bootstrap.iterative import IterativeBootstrap
from ratecurve.bootstrap.results import BootstrapReport
from ratecurve.bootstrap.solvers import NodeSolver, SolverKind
from ratecurve.conventions.daycount import DayCountConvention
from ratecurve.instruments.base import RateHelper
from ratecurve.interpolation import InterpolationMethod, get_interpolation_method
from ratecurve.quotes import QuoteLike, SimpleQuote

from .base import YieldCurve
from .interpolated import InterpolatedCurve
from .traits import CurveTrait, ValueTrait, create_trait

logger = logging.getLogger(__name__)


class PiecewiseYieldCurve(YieldCurve):
    """Yield curve whose nodes reprice a set of rate helpers."""

    def __init__(
        self,
        reference_date: Union[date, datetime],
        helpers: Sequence[RateHelper],
        trait: Union[str, CurveTrait, ValueTrait] = CurveTrait.DISCOUNT,
        interpolation: Union[str, InterpolationMethod] = InterpolationMethod.LOG_LINEAR,
        day_count: Union[str, DayCountConvention] = "ACT/365F",
        jumps: Sequence[QuoteLike] = (),
        jump_dates: Sequence[date] = (),
        config: Optional[BootstrapConfig] = None,
        solver: Optional[Union[str, SolverKind, NodeSolver]] = None,
        bootstrap: Optional[Bootstrap] = None,
        name: str = "",
        allow_negative_rates: bool = False,
        allow_extrapolation: bool = False,
    ):
        """
        Set up the curve; no solving happens until the first query.

        Args:
            reference_date: Curve reference date (time zero)
            helpers: Calibrating instruments, one per node
            trait: What the nodes hold (discount factors, zero or forward rates)
            interpolation: Interpolation method for node values
            day_count: Day count turning dates into curve times
            jumps: Multiplicative discount jumps (quotes or plain numbers)
            jump_dates: Dates of the jumps; year-ends when omitted
            config: Bootstrap configuration
            solver: Node solver, overriding the one named in ``config``
            bootstrap: Bootstrap strategy; built from ``config`` and ``solver`` when None
            name: Optional curve name
            allow_negative_rates: Widen the trait brackets to negative rates
            allow_extrapolation: Permit queries beyond the last pillar

        Raises:
            ConfigurationError: Empty or inconsistent helper set, jump mismatch
        """
        super().__init__(reference_date, day_count, name, allow_extrapolation)
        self.trait = create_trait(trait, allow_negative_rates)
        self.interpolation_method = get_interpolation_method(interpolation)
        self.bootstrap = (
            bootstrap if bootstrap is not None else IterativeBootstrap(config, solver)
        )

        self._template = InterpolatedCurve(
            self.reference_date,
            trait=self.trait,
            interpolation=self.interpolation_method,
            day_count=self.day_count,
            jumps=jumps,
            jump_dates=jump_dates,
            name=name,
        )
        self._helpers: List[RateHelper] = self.bootstrap.setup(self._template, helpers)

        self._lock = threading.RLock()
        self._snapshot: Optional[InterpolatedCurve] = None
        self._report: Optional[BootstrapReport] = None
        self._versions: Optional[Tuple[int, ...]] = None
        self._dirty = True

    # ------------------------------------------------------------------
    # Lazy recalculation
    # ------------------------------------------------------------------
    def _quote_versions(self) -> Tuple[int, ...]:
        return tuple(h.quote.version for h in self._helpers) + tuple(
            j.version for j in self._template.jumps
        )

    def _needs_recalculation(self) -> bool:
        return (
            self._dirty
            or self._snapshot is None
            or self._versions != self._quote_versions()
        )

    def _perform_calculations(self) -> None:
        versions = self._quote_versions()
        working = self._template.copy()
        # moved quotes restart from scratch; old nodes may not bracket the new roots
        seed = None
        if self._snapshot is not None and versions == self._versions:
            seed = self._snapshot.data
        logger.debug("Recalculating %s (seeded=%s)", self, seed is not None)

        report = self.bootstrap.calculate(working, self._helpers, seed=seed)

        self._snapshot = working.freeze()
        self._report = report
        self._versions = versions
        self._dirty = False

    def snapshot(self) -> InterpolatedCurve:
        """Frozen node curve, re-bootstrapped first if any quote changed."""
        with self._lock:
            if self._needs_recalculation():
                self._perform_calculations()
            return self._snapshot

    def update(self) -> None:
        """Mark the curve dirty; the next query re-bootstraps."""
        with self._lock:
            self._dirty = True

    def recalculate(self) -> BootstrapReport:
        """Re-bootstrap now, whether or not any quote changed."""
        with self._lock:
            self._dirty = True
            self.snapshot()
            return self._report

    @property
    def last_converged(self) -> Optional[InterpolatedCurve]:
        """Most recent converged node curve, without triggering a recalculation."""
        return self._snapshot

    @property
    def report(self) -> BootstrapReport:
        self.snapshot()
        return self._report

    @property
    def state(self) -> BootstrapState:
        return self.bootstrap.state

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------
    @property
    def helpers(self) -> List[RateHelper]:
        return list(self._helpers)

    @property
    def jumps(self) -> List[SimpleQuote]:
        return self._template.jumps

    @property
    def jump_dates(self) -> List[date]:
        return self._template.jump_dates

    @property
    def max_date(self) -> date:
        return self._helpers[-1].latest_date

    def dates(self) -> Tuple[date, ...]:
        return self.snapshot().dates

    def times(self) -> np.ndarray:
        return self.snapshot().times

    def data(self) -> np.ndarray:
        return self.snapshot().data

    def nodes(self) -> List[Tuple[date, float]]:
        return self.snapshot().nodes()

    # ------------------------------------------------------------------
    # Curve implementation
    # ------------------------------------------------------------------
    def _discount_impl(self, t: float) -> float:
        return self.snapshot()._discount_impl(t)

    def _forward_impl(self, t: float) -> float:
        return self.snapshot()._forward_impl(t)

    def __repr__(self) -> str:
        return (
            f"PiecewiseYieldCurve(reference_date={self.reference_date}, "
            f"trait={self.trait.name}, interpolation={self.interpolation_method.value}, "
            f"helpers={len(self._helpers)})"
        )
