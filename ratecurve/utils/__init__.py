"""Numerical utilities."""

from .rootfinding import RootFindingError, RootResult, bisect, brent, newton_safe

__all__ = ["RootFindingError", "RootResult", "bisect", "brent", "newton_safe"]
