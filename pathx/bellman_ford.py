"""Bellman-Ford single-source shortest paths with negative-cycle detection."""

from __future__ import annotations

from typing import Iterator, Optional

from .config import AlgorithmConfig
from .events import Event
from .exceptions import AlgorithmError
from .graph import Edge, GraphProtocol
from .lifecycle import CancellationToken
from .logger import Logger
from .relaxers import DistanceRelaxer
from .state import GraphColor, ShortestPathAlgorithm, WeightFn


class BellmanFordShortestPath(ShortestPathAlgorithm):
    """Bellman-Ford over arbitrary real weights.

    Runs up to ``|V|`` passes over every edge (fewer when a pass relaxes
    nothing, or when ``config.max_passes`` caps them), then scans the edges
    once more. The first edge that can still be relaxed fires
    ``edge_minimized`` and sets :attr:`found_negative_cycle`; no exception is
    raised. Without a root the first vertex of the graph is used.

    After every run all vertices are colored BLACK.
    """

    name = "bellman_ford"
    extra_counters = ("passes",)

    def __init__(
        self,
        graph: GraphProtocol,
        weights: WeightFn,
        distance_relaxer: Optional[DistanceRelaxer] = None,
        config: Optional[AlgorithmConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        super().__init__(graph, weights, distance_relaxer, config, logger)
        self.edge_minimized = Event("edge_minimized")
        self.edge_not_minimized = Event("edge_not_minimized")
        self.found_negative_cycle = False

    def _edges(self) -> Iterator[Edge]:
        # Out-edges of every vertex, so undirected graphs relax both ways.
        for u in self._paths.colors:
            yield from self.graph.out_edges(u)

    def _initialize(self) -> None:
        super()._initialize()
        self.found_negative_cycle = False
        root = self.try_get_root()
        if root is None:
            if not self._paths.distances:
                raise AlgorithmError("root not set and graph is empty")
            root = next(iter(self._paths.distances))
        self._paths.distances[root] = 0.0

    def _compute(self, token: CancellationToken) -> None:
        n = len(self._paths.distances)
        limit = n if self.config.max_passes is None else min(self.config.max_passes, n)

        for _ in range(limit):
            self.counters["passes"] += 1
            improved = False
            for e in self._edges():
                token.raise_if_cancelled()
                self.counters["edges_examined"] += 1
                self.examine_edge.fire(e)
                if self._relax(e):
                    improved = True
                    self.tree_edge.fire(e)
                else:
                    self.edge_not_relaxed.fire(e)
            if not improved:
                break

        relaxer = self.distance_relaxer
        dist = self._paths.distances
        for e in self._edges():
            token.raise_if_cancelled()
            candidate = relaxer.combine(dist[e.source], self.weights(e))
            if relaxer.compare(candidate, dist[e.target]) < 0:
                self.edge_minimized.fire(e)
                self.found_negative_cycle = True
                self.logger.warning("bellman_ford.negative_cycle", edge=str(e))
                return
            self.edge_not_minimized.fire(e)
        self.found_negative_cycle = False

    def _clean(self) -> None:
        colors = self._paths.colors
        for v in colors:
            colors[v] = GraphColor.BLACK


__all__ = ["BellmanFordShortestPath"]
