"""Instrumentation records produced by the path algorithms."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, Optional

BASE_COUNTERS = ("vertices_examined", "edges_examined", "edges_relaxed")


def new_counters(extra: Iterable[str] = ()) -> Dict[str, int]:
    """Return a zeroed counter dict with the common keys plus ``extra``."""
    counters = {k: 0 for k in BASE_COUNTERS}
    for k in extra:
        counters[k] = 0
    return counters


@dataclass(frozen=True)
class AlgorithmMetrics:
    """Summary of one ``compute()`` call.

    Attributes:
        algorithm: Short algorithm name, e.g. ``"dijkstra"``.
        n: Number of vertices in the graph.
        m: Number of edges in the graph.
        relaxer: Name of the distance relaxer in use.
        state: Final computation state name.
        counters: Copy of the algorithm counters.
        wall_ms: Wall-clock duration of the last computation in milliseconds.
    """

    algorithm: str
    n: int
    m: int
    relaxer: str
    state: str
    counters: Dict[str, int] = field(default_factory=dict)
    wall_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the metrics as a plain dictionary."""
        return asdict(self)


__all__ = ["AlgorithmMetrics", "BASE_COUNTERS", "new_counters"]
