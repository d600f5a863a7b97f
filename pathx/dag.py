"""Single-source shortest (or critical) paths on a directed acyclic graph."""

from __future__ import annotations

from typing import Optional

from .config import AlgorithmConfig
from .events import Event
from .exceptions import AlgorithmError
from .graph import GraphProtocol
from .lifecycle import CancellationToken
from .logger import Logger
from .relaxers import DistanceRelaxer
from .state import GraphColor, ShortestPathAlgorithm, WeightFn
from .topology import TopologicalSorter, topological_sort


class DagShortestPath(ShortestPathAlgorithm):
    """Relaxes out-edges once per vertex, in topological order.

    Negative weights are fine. Passing :data:`~pathx.relaxers.CRITICAL` as
    the relaxer yields longest (critical) paths in the same single pass.
    A cyclic graph raises :class:`~pathx.exceptions.NotAcyclicError` before
    any edge is relaxed. Without a root the first vertex of the graph is
    used.

    Args:
        graph: Read-only graph capability; must be acyclic.
        weights: Edge weight function.
        distance_relaxer: Relaxer; resolved from ``config`` when ``None``.
        config: Algorithm configuration.
        logger: Optional logger.
        topological_sorter: Returns the vertices in topological order.
            Defaults to the networkx-backed :func:`~pathx.topology.topological_sort`.
    """

    name = "dag"

    def __init__(
        self,
        graph: GraphProtocol,
        weights: WeightFn,
        distance_relaxer: Optional[DistanceRelaxer] = None,
        config: Optional[AlgorithmConfig] = None,
        logger: Optional[Logger] = None,
        topological_sorter: TopologicalSorter = topological_sort,
    ) -> None:
        super().__init__(graph, weights, distance_relaxer, config, logger)
        self.topological_sorter = topological_sorter
        self.start_vertex = Event("start_vertex")
        self.discover_vertex = Event("discover_vertex")
        self.examine_vertex = Event("examine_vertex")
        self.finish_vertex = Event("finish_vertex")

    def _compute(self, token: CancellationToken) -> None:
        colors = self._paths.colors
        root = self.try_get_root()
        if root is None:
            if not colors:
                raise AlgorithmError("root not set and graph is empty")
            root = next(iter(colors))

        order = self.topological_sorter(self.graph)

        colors[root] = GraphColor.GRAY
        self._paths.distances[root] = 0.0
        self.discover_vertex.fire(root)
        for u in order:
            token.raise_if_cancelled()
            self.start_vertex.fire(u)
            colors[u] = GraphColor.GRAY
            self.counters["vertices_examined"] += 1
            self.examine_vertex.fire(u)
            for e in self.graph.out_edges(u):
                colors[e.target] = GraphColor.GRAY
                self.counters["edges_examined"] += 1
                self.examine_edge.fire(e)
                self.discover_vertex.fire(e.target)
                if self._relax(e):
                    self.tree_edge.fire(e)
                else:
                    self.edge_not_relaxed.fire(e)
            colors[u] = GraphColor.BLACK
            self.finish_vertex.fire(u)


__all__ = ["DagShortestPath"]
