"""
Iterative bootstrap.

Nodes are solved one at a time in pillar order, each one so that its helper
reprices exactly, and whole passes are repeated until no node moves by more
than the required accuracy. A single pass is enough for local interpolations;
global ones (cubic splines) need the repeated passes because later nodes move
the curve at earlier pillars.
"""

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Union

import numpy as np

from ratecurve.errors import ConfigurationError, ConvergenceError, DomainError, QuoteError
from ratecurve.interpolation import is_global
from ratecurve.utils.rootfinding import RootFindingError

from .base import Bootstrap, BootstrapConfig, BootstrapState
from .results import BootstrapReport, NodeResult
from .solvers import NodeSolver, SolverKind, create_solver

if TYPE_CHECKING:
    from ratecurve.curves.interpolated import InterpolatedCurve
    from ratecurve.instruments.base import RateHelper

logger = logging.getLogger(__name__)


class IterativeBootstrap(Bootstrap):
    """Pass-by-pass bootstrap with a global fixed-point loop."""

    def __init__(
        self,
        config: Optional[BootstrapConfig] = None,
        solver: Optional[Union[str, SolverKind, NodeSolver]] = None,
    ):
        super().__init__(config)
        self.solver = create_solver(solver if solver is not None else self.config.solver)

    def calculate(
        self,
        curve: "InterpolatedCurve",
        helpers: Sequence["RateHelper"],
        seed: Optional[Sequence[float]] = None,
    ) -> BootstrapReport:
        """
        Fill the nodes of ``curve`` so that every helper reprices.

        Args:
            curve: Working curve, mutated in place
            helpers: Rate helpers, one per node
            seed: Node values of a previous converged run on the same pillars;
                when given the run starts from them instead of from scratch

        Returns:
            Report with pass count, last change and per-node repricing

        Raises:
            ConfigurationError: Invalid helper set
            QuoteError: A helper quote is missing or not finite
            ConvergenceError: A node cannot be solved or the passes do not settle
        """
        self.state = BootstrapState.FIRST_PASS
        try:
            report = self._run(curve, helpers, seed)
        except Exception:
            self.state = BootstrapState.FAILED
            raise
        self.state = BootstrapState.CONVERGED
        return report

    def _check_quotes(self, helpers: List["RateHelper"]) -> None:
        for i, helper in enumerate(helpers, start=1):
            if not helper.quote.is_valid():
                raise QuoteError(
                    f"Instrument {i} (maturity {helper.latest_date}) has an invalid "
                    f"quote: {helper.quote.value!r}"
                )

    def _run(
        self,
        curve: "InterpolatedCurve",
        helpers: Sequence["RateHelper"],
        seed: Optional[Sequence[float]],
    ) -> BootstrapReport:
        helpers = self.setup(curve, helpers)
        self._check_quotes(helpers)

        trait = curve.trait
        n = len(helpers)
        dates = [curve.reference_date] + [h.latest_date for h in helpers]
        times = [0.0] + [curve.time_from_reference(d) for d in dates[1:]]

        valid_data = seed is not None
        if valid_data:
            if len(seed) != n + 1:
                raise ConfigurationError(
                    f"Seed has {len(seed)} values, expected {n + 1}"
                )
            data = [float(v) for v in seed]
        else:
            data = [trait.initial_value(curve)] + [trait.initial_guess()] * n
        curve.set_nodes(dates, times, data)

        accuracy = self.config.accuracy
        max_passes = self.config.max_iterations or trait.max_iterations()
        max_evaluations = self.config.max_evaluations or trait.max_iterations()
        pass_level = logging.INFO if self.config.verbose else logging.DEBUG

        logger.info(
            "Bootstrapping %s: %d helpers, trait=%s, interpolation=%s%s",
            curve.name or "curve",
            n,
            trait.name,
            curve.interpolation_method.value,
            " (seeded)" if valid_data else "",
        )

        # later nodes only move earlier pillars under a global interpolation
        loop_required = is_global(curve.interpolation_method)
        previous = curve.data
        passes = 0
        while True:
            passes += 1
            extend = not valid_data
            for i, helper in enumerate(helpers, start=1):
                self._solve_node(
                    curve, helper, i, passes, valid_data, extend, accuracy, max_evaluations
                )
            if extend:
                curve.rebuild_interpolation()

            current = curve.data
            change = float(np.max(np.abs(current[1:] - previous[1:])))
            logger.log(pass_level, "Pass %d: max node change %.3e", passes, change)

            if change <= accuracy or not loop_required:
                break
            if passes >= max_passes:
                logger.error(
                    "No convergence after %d passes: last change %.3e, accuracy %.3e",
                    passes, change, accuracy,
                )
                raise ConvergenceError(
                    f"Convergence not reached after {passes} passes; last change "
                    f"{change:.3e}, required accuracy {accuracy:.3e}"
                )
            previous = current
            valid_data = True
            self.state = BootstrapState.CONVERGING

        self._check_discounts(curve)
        logger.info("Bootstrap converged after %d passes (last change %.3e)", passes, change)
        return self._build_report(curve, helpers, passes, change)

    def _solve_node(
        self,
        curve: "InterpolatedCurve",
        helper: "RateHelper",
        i: int,
        pass_number: int,
        valid_data: bool,
        extend: bool,
        accuracy: float,
        max_evaluations: int,
    ) -> None:
        trait = curve.trait
        data = curve.data
        times = curve.times

        lower = trait.min_value_after(i, data, times, valid_data)
        upper = trait.max_value_after(i, data, times, valid_data)
        guess = trait.guess(curve, i, valid_data)
        if guess >= upper:
            guess = upper - (upper - lower) / 5.0
        elif guess <= lower:
            guess = lower + (upper - lower) / 5.0

        if extend:
            # interpolate on the nodes solved so far plus the current one
            curve.rebuild_interpolation(i + 1)

        def objective(x: float) -> float:
            curve.set_node_value(i, x)
            return helper.quote_error(curve)

        if valid_data and self._guess_brackets_root(objective, guess, accuracy):
            root = guess
        else:
            try:
                result = self.solver.solve(
                    objective, guess, lower, upper, accuracy, max_evaluations
                )
            except RootFindingError as exc:
                logger.error(
                    "Pass %d: node %d (%s) failed in [%.10g, %.10g] from guess %.10g",
                    pass_number, i, helper, lower, upper, guess,
                )
                raise ConvergenceError(
                    f"Pass {pass_number}: failed at node {i} ({helper}, pillar "
                    f"{helper.latest_date}), bracket [{lower:.10g}, {upper:.10g}]: {exc}"
                ) from exc
            root = result.root

        if not lower <= root <= upper:
            raise DomainError(
                f"Node {i} value {root} outside admissible range [{lower}, {upper}]"
            )
        curve.set_node_value(i, root)
        logger.debug("Pass %d: node %d (%s) = %.14g", pass_number, i, helper, root)

    @staticmethod
    def _guess_brackets_root(
        objective: Callable[[float], float], guess: float, accuracy: float
    ) -> bool:
        """True when the root lies within ``accuracy`` of the guess."""
        f_low = objective(guess - accuracy)
        f_high = objective(guess + accuracy)
        return f_low * f_high <= 0.0

    @staticmethod
    def _check_discounts(curve: "InterpolatedCurve") -> None:
        if curve.trait.allow_negative_rates:
            return
        discounts = [curve.discount(d) for d in curve.dates]
        for i in range(1, len(discounts)):
            increase = discounts[i] - discounts[i - 1]
            if increase > 1e-6:
                logger.warning(
                    "Discount factors increasing at node %s (increase = %.8f)", i, increase
                )

    def _build_report(
        self,
        curve: "InterpolatedCurve",
        helpers: List["RateHelper"],
        passes: int,
        change: float,
    ) -> BootstrapReport:
        times = curve.times
        data = curve.data
        nodes = [
            NodeResult(
                index=i,
                helper=str(helper),
                pillar_date=helper.latest_date,
                time=float(times[i]),
                value=float(data[i]),
                discount_factor=curve.discount(helper.latest_date),
                market_quote=helper.market_quote(),
                implied_quote=helper.implied_quote(curve),
            )
            for i, helper in enumerate(helpers, start=1)
        ]
        return BootstrapReport(
            trait=curve.trait.name,
            interpolation=curve.interpolation_method.value,
            passes=passes,
            last_change=change,
            accuracy=self.config.accuracy,
            nodes=nodes,
        )
