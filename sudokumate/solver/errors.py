"""Exceptions raised by the constraint engine on misuse."""


class SolverError(Exception):
    """Base class for all constraint engine errors."""


class GraphFrozenError(SolverError):
    """Raised when candidate membership is changed after the graph is frozen."""


class NoUniqueSolutionError(SolverError):
    """Raised when a solution is requested without a unique classification."""
