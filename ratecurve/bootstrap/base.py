"""Base bootstrap framework: configuration, run states and the strategy interface."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from ratecurve.errors import ConfigurationError

from .solvers import NodeSolver, SolverKind, create_solver

if TYPE_CHECKING:
    from ratecurve.curves.interpolated import InterpolatedCurve
    from ratecurve.instruments.base import RateHelper

    from .results import BootstrapReport

logger = logging.getLogger(__name__)


@dataclass
class BootstrapConfig:
    """Configuration for bootstrap process."""

    accuracy: float = 1e-12
    max_iterations: Optional[int] = None  # total passes, first included; trait default when None
    max_evaluations: Optional[int] = None  # per node solve; trait default when None
    solver: Union[str, SolverKind, NodeSolver] = "BRENT"
    verbose: bool = False

    def __post_init__(self):
        if not self.accuracy > 0:
            raise ConfigurationError(f"Accuracy must be positive: {self.accuracy}")
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be at least 1: {self.max_iterations}"
            )
        if self.max_evaluations is not None and self.max_evaluations < 1:
            raise ConfigurationError(
                f"max_evaluations must be at least 1: {self.max_evaluations}"
            )
        # fail on unknown solver names now rather than mid-run
        create_solver(self.solver)


class BootstrapState(Enum):
    UNINITIALIZED = "UNINITIALIZED"
    FIRST_PASS = "FIRST_PASS"
    CONVERGING = "CONVERGING"
    CONVERGED = "CONVERGED"
    FAILED = "FAILED"


class Bootstrap(ABC):
    """
    Strategy that fills the nodes of an interpolated curve from rate helpers.

    ``setup`` performs every structural check so that configuration problems
    surface before any solving; ``calculate`` runs the solve.
    """

    def __init__(self, config: Optional[BootstrapConfig] = None):
        self.config = config or BootstrapConfig()
        self.state = BootstrapState.UNINITIALIZED

    def setup(
        self, curve: "InterpolatedCurve", helpers: Sequence["RateHelper"]
    ) -> List["RateHelper"]:
        """
        Validate the helper set against the curve.

        Returns:
            Helpers sorted by pillar date

        Raises:
            ConfigurationError: If the set is empty, two helpers share a pillar
                date, a helper has expired or starts before the curve, or node
                times are not strictly increasing
        """
        if not helpers:
            raise ConfigurationError("No rate helpers given: cannot bootstrap a curve")

        ordered = sorted(helpers, key=lambda h: h.latest_date)
        initial_date = curve.trait.initial_date(curve)

        previous_time = 0.0
        for i, helper in enumerate(ordered):
            if i > 0 and helper.latest_date == ordered[i - 1].latest_date:
                raise ConfigurationError(
                    f"More than one instrument with pillar date {helper.latest_date}: "
                    f"{ordered[i - 1]} and {helper}"
                )
            if helper.latest_date <= curve.reference_date:
                raise ConfigurationError(
                    f"Instrument {i + 1} ({helper}) has pillar date {helper.latest_date} "
                    f"not after the reference date {curve.reference_date}"
                )
            if helper.earliest_date < initial_date:
                raise ConfigurationError(
                    f"Instrument {i + 1} ({helper}) starts on {helper.earliest_date}, "
                    f"before the curve's initial date {initial_date}"
                )
            t = curve.time_from_reference(helper.latest_date)
            if t <= previous_time:
                raise ConfigurationError(
                    f"Pillar time {t} of {helper} is not after the previous node time "
                    f"{previous_time}"
                )
            previous_time = t
        return ordered

    @abstractmethod
    def calculate(
        self,
        curve: "InterpolatedCurve",
        helpers: Sequence["RateHelper"],
        seed: Optional[Sequence[float]] = None,
    ) -> "BootstrapReport":
        pass
