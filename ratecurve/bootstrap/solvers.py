"""Node solvers: the bracketed 1-D root finder used for each curve node."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Union

from ratecurve.errors import ConfigurationError
from ratecurve.utils.rootfinding import RootResult, bisect, brent, newton_safe


class NodeSolver(ABC):
    """Finds the node value zeroing a helper's quote error inside a bracket."""

    name = ""

    @abstractmethod
    def solve(
        self,
        objective: Callable[[float], float],
        guess: float,
        lower: float,
        upper: float,
        accuracy: float,
        max_evaluations: int,
    ) -> RootResult:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BrentSolver(NodeSolver):
    name = "BRENT"

    def solve(self, objective, guess, lower, upper, accuracy, max_evaluations):
        return brent(objective, guess, lower, upper, accuracy, max_evaluations)


class BisectionSolver(NodeSolver):
    """Ignores the guess; robust but needs about log2(width/accuracy) evaluations."""

    name = "BISECTION"

    def solve(self, objective, guess, lower, upper, accuracy, max_evaluations):
        return bisect(objective, lower, upper, accuracy, max_evaluations)


class NewtonSafeSolver(NodeSolver):
    name = "NEWTON_SAFE"

    def __init__(self, bump: float = 1e-7):
        self.bump = bump

    def solve(self, objective, guess, lower, upper, accuracy, max_evaluations):
        return newton_safe(
            objective, guess, lower, upper, accuracy, max_evaluations, bump=self.bump
        )


class SolverKind(Enum):
    BRENT = "BRENT"
    BISECTION = "BISECTION"
    NEWTON_SAFE = "NEWTON_SAFE"


_SOLVERS = {
    SolverKind.BRENT: BrentSolver,
    SolverKind.BISECTION: BisectionSolver,
    SolverKind.NEWTON_SAFE: NewtonSafeSolver,
}


def create_solver(solver: Union[str, SolverKind, NodeSolver]) -> NodeSolver:
    """Resolve a solver by kind or name; solver instances pass through."""
    if isinstance(solver, NodeSolver):
        return solver
    if isinstance(solver, str):
        key = solver.upper().strip()
        if key not in SolverKind.__members__:
            raise ConfigurationError(
                f"Unknown solver: {solver}. Available: {list(SolverKind.__members__)}"
            )
        solver = SolverKind[key]
    return _SOLVERS[solver]()
