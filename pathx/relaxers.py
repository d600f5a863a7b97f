"""Distance relaxers: the algebra behind every relaxation-based algorithm.

A relaxer fixes the initial distance of an unreached vertex, how a path
distance is extended by an edge weight, and which of two distances is
"better". Swapping :data:`SHORTEST` for :data:`CRITICAL` turns a shortest-path
computation into a longest (critical) path computation without touching the
traversal code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict

from .exceptions import ConfigError


def _ascending(a: float, b: float) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def _descending(a: float, b: float) -> int:
    return _ascending(b, a)


def _add(d: float, w: float) -> float:
    return d + w


@dataclass(frozen=True)
class DistanceRelaxer:
    """Strategy defining initial distance, combine operator and ordering.

    Attributes:
        name: Short identifier used in logs and metrics.
        initial_distance: Distance of a vertex before any relaxation.
        combine: Extends a path distance ``d`` by an edge weight ``w``.
        compare: Returns a negative number if ``a`` is better than ``b``,
            zero if they tie and a positive number otherwise.
    """

    name: str
    initial_distance: float
    combine: Callable[[float, float], float]
    compare: Callable[[float, float], int]

    def is_better(self, a: float, b: float) -> bool:
        """Return ``True`` if distance ``a`` strictly improves on ``b``."""
        return self.compare(a, b) < 0


SHORTEST = DistanceRelaxer("shortest", math.inf, _add, _ascending)
CRITICAL = DistanceRelaxer("critical", -math.inf, _add, _descending)
# Hop-count algebra over unit weights. Distances start at zero, so it only
# suits algorithms that never read the initial distance (Floyd-Warshall).
EDGE_COUNT = DistanceRelaxer("edge_count", 0.0, _add, _ascending)

_BY_NAME: Dict[str, DistanceRelaxer] = {
    r.name: r for r in (SHORTEST, CRITICAL, EDGE_COUNT)
}


def get_relaxer(name: str) -> DistanceRelaxer:
    """Return the standard relaxer registered under ``name``.

    Raises:
        ConfigError: If ``name`` is not a known relaxer.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ConfigError(f"unknown relaxer '{name}'") from None


__all__ = ["DistanceRelaxer", "SHORTEST", "CRITICAL", "EDGE_COUNT", "get_relaxer"]
