"""A* shortest paths guided by a vertex heuristic."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .config import AlgorithmConfig
from .exceptions import InputError
from .graph import Edge, Float, GraphProtocol, Vertex
from .logger import Logger
from .relaxers import DistanceRelaxer
from .state import GraphColor, WeightFn
from .search import PriorityFrontierSearch

Heuristic = Callable[[Vertex], Float]


class AStarShortestPath(PriorityFrontierSearch):
    """A* search: Dijkstra ordered by ``combine(distance, heuristic)``.

    The frontier priority of ``v`` is its cost ``combine(dist[v], h(v))``,
    recomputed every time ``dist[v]`` improves. The heuristic is not
    validated; if it is inconsistent a settled (BLACK) vertex can still be
    improved, in which case it is re-opened (GRAY, enqueued again).
    """

    name = "astar"
    extra_counters = ("heuristic_calls",)

    def __init__(
        self,
        graph: GraphProtocol,
        weights: WeightFn,
        heuristic: Heuristic,
        distance_relaxer: Optional[DistanceRelaxer] = None,
        config: Optional[AlgorithmConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialize the search.

        Args:
            graph: Read-only graph capability.
            weights: Edge weight function (non-negative).
            heuristic: Estimated remaining distance of a vertex.
            distance_relaxer: Relaxer; resolved from ``config`` when ``None``.
            config: Algorithm configuration.
            logger: Optional logger.

        Raises:
            InputError: If ``heuristic`` is missing.
        """
        super().__init__(graph, weights, distance_relaxer, config, logger)
        if heuristic is None or not callable(heuristic):
            raise InputError("heuristic must be a callable Vertex -> float.")
        self.heuristic = heuristic
        self._costs: Dict[Vertex, Float] = {}

    @property
    def costs(self) -> Mapping[Vertex, Float]:
        """Read-only view of the last computed cost of each discovered vertex."""
        return MappingProxyType(self._costs)

    def _initialize(self) -> None:
        super()._initialize()
        self._costs = {}

    def _priority(self, vertex: Vertex) -> Float:
        return self._costs[vertex]

    def _improved(self, vertex: Vertex) -> None:
        self.counters["heuristic_calls"] += 1
        self._costs[vertex] = self.distance_relaxer.combine(
            self._paths.distances[vertex], self.heuristic(vertex)
        )

    def _black_target(self, edge: Edge) -> None:
        if self._relax(edge):
            v = edge.target
            self._paths.colors[v] = GraphColor.GRAY
            self._improved(v)
            self.frontier.enqueue(v)
            self.tree_edge.fire(edge)
        else:
            self.edge_not_relaxed.fire(edge)


__all__ = ["AStarShortestPath", "Heuristic"]
