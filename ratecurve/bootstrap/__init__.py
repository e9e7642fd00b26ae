"""Bootstrap strategies, node solvers and run reports."""

from .base import Bootstrap, BootstrapConfig, BootstrapState
from .iterative import IterativeBootstrap
from .results import BootstrapReport, NodeResult
from .solvers import (
    BisectionSolver,
    BrentSolver,
    NewtonSafeSolver,
    NodeSolver,
    SolverKind,
    create_solver,
)

__all__ = [
    "Bootstrap",
    "BootstrapConfig",
    "BootstrapState",
    "IterativeBootstrap",
    "BootstrapReport",
    "NodeResult",
    "NodeSolver",
    "BrentSolver",
    "BisectionSolver",
    "NewtonSafeSolver",
    "SolverKind",
    "create_solver",
]
