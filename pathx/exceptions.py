"""Custom exception types used across :mod:`pathx`."""

from __future__ import annotations

from typing import Any, Optional


class PathXError(Exception):
    """Base class for all package-specific errors."""


class InputError(PathXError, ValueError):
    """Raised for invalid user input such as a missing graph or weight function."""


class VertexNotFoundError(InputError, KeyError):
    """Raised when a vertex is not part of the graph or was never visited."""

    def __init__(self, message: str, vertex: Any = None) -> None:
        """Initialize the error.

        Args:
            message: Human readable description.
            vertex: The offending vertex, if known.
        """
        super().__init__(message)
        self.vertex = vertex

    def __str__(self) -> str:  # KeyError quotes its message otherwise
        return str(self.args[0]) if self.args else ""


class ConfigError(PathXError, ValueError):
    """Raised for invalid configuration options."""


class AlgorithmError(PathXError, RuntimeError):
    """Raised when an algorithm cannot run or its invariants are violated."""


class NegativeWeightError(AlgorithmError):
    """Raised when Dijkstra or A* examines an edge with a negative weight."""

    def __init__(self, edge: Any, weight: float) -> None:
        """Initialize the error with the offending edge and its weight."""
        super().__init__(f"negative weight {weight} on edge {edge}")
        self.edge = edge
        self.weight = weight


class NegativeCycleError(AlgorithmError):
    """Raised when a negative cycle makes shortest paths undefined."""

    def __init__(self, vertex: Optional[Any] = None) -> None:
        """Initialize the error.

        Args:
            vertex: A vertex lying on the negative cycle, if known.
        """
        msg = "graph contains a negative cycle"
        if vertex is not None:
            msg += f" through vertex {vertex!r}"
        super().__init__(msg)
        self.vertex = vertex


class NotAcyclicError(AlgorithmError):
    """Raised when a topological order is requested for a cyclic graph."""


class ComputationCancelled(PathXError):
    """Internal signal raised at a safe point after :meth:`abort`.

    Only the lifecycle wrapper catches it; it never reaches the caller of
    ``compute()``.
    """


__all__ = [
    "PathXError",
    "InputError",
    "VertexNotFoundError",
    "ConfigError",
    "AlgorithmError",
    "NegativeWeightError",
    "NegativeCycleError",
    "NotAcyclicError",
    "ComputationCancelled",
]
