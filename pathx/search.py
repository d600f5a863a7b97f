"""Best-first traversal shared by Dijkstra and A*."""

from __future__ import annotations

from typing import Optional

from .config import AlgorithmConfig
from .events import Event
from .exceptions import AlgorithmError, NegativeWeightError
from .frontier import FrontierProtocol, IndexedHeapFrontier
from .graph import Edge, Float, GraphProtocol, Vertex
from .lifecycle import CancellationToken
from .logger import Logger
from .relaxers import DistanceRelaxer
from .state import GraphColor, ShortestPathAlgorithm, WeightFn


class PriorityFrontierSearch(ShortestPathAlgorithm):
    """Generalized breadth-first search over a priority frontier.

    Vertices go WHITE -> GRAY -> BLACK. GRAY vertices wait in an
    :class:`IndexedHeapFrontier` ordered by :meth:`_priority` using the
    relaxer's comparison. Without a root every WHITE vertex in graph order
    starts a new traversal. With a target, ``target_reached`` fires when the
    target is dequeued and, if ``config.stop_at_target`` is set, the
    traversal ends there.

    Subclasses decide the priority and what happens on an edge into a BLACK
    vertex.
    """

    def __init__(
        self,
        graph: GraphProtocol,
        weights: WeightFn,
        distance_relaxer: Optional[DistanceRelaxer] = None,
        config: Optional[AlgorithmConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        super().__init__(graph, weights, distance_relaxer, config, logger)
        self.target_changed = self._rooted.target_changed
        self.target_reached = Event("target_reached")
        self.start_vertex = Event("start_vertex")
        self.discover_vertex = Event("discover_vertex")
        self.examine_vertex = Event("examine_vertex")
        self.finish_vertex = Event("finish_vertex")
        self._frontier: Optional[FrontierProtocol] = None

    # ---- target -------------------------------------------------------

    def set_target(self, vertex: Vertex) -> None:
        self._rooted.set_target(vertex)

    def clear_target(self) -> None:
        self._rooted.clear_target()

    def try_get_target(self) -> Optional[Vertex]:
        return self._rooted.try_get_target()

    def compute(  # type: ignore[override]
        self,
        root: Optional[Vertex] = None,
        target: Optional[Vertex] = None,
    ) -> None:
        """Run the search, optionally setting root and target first.

        Raises:
            VertexNotFoundError: If ``root`` or ``target`` is not in the graph.
        """
        if root is not None:
            self.set_root(root)
        if target is not None:
            self.set_target(target)
        super().compute()

    # ---- hooks --------------------------------------------------------

    def _priority(self, vertex: Vertex) -> Float:
        return self._paths.distances[vertex]

    def _improved(self, vertex: Vertex) -> None:
        """Called whenever the distance of ``vertex`` was set or improved."""

    def _black_target(self, edge: Edge) -> None:
        self.edge_not_relaxed.fire(edge)

    # ---- traversal ----------------------------------------------------

    def _initialize(self) -> None:
        super()._initialize()
        self._frontier = IndexedHeapFrontier(self._priority, self.distance_relaxer.compare)

    def _compute(self, token: CancellationToken) -> None:
        root = self.try_get_root()
        if root is not None:
            self._visit(root, token)
            return
        for v in list(self._paths.colors):
            if self._paths.colors[v] is GraphColor.WHITE and self._visit(v, token):
                return

    @property
    def frontier(self) -> FrontierProtocol:
        """Frontier of the current or last computation.

        Raises:
            AlgorithmError: If the algorithm has never been computed.
        """
        if self._frontier is None:
            raise AlgorithmError(f"{self.name}: no frontier before compute()")
        return self._frontier

    def _clean(self) -> None:
        if self._frontier is not None:
            self._frontier.clear()

    def _visit(self, source: Vertex, token: CancellationToken) -> bool:
        """Traverse from ``source``; return ``True`` if stopped at the target."""
        frontier = self.frontier
        colors = self._paths.colors
        target = self.try_get_target()
        stop = self.config.stop_at_target and target is not None

        self.start_vertex.fire(source)
        colors[source] = GraphColor.GRAY
        self._paths.distances[source] = 0.0
        self._improved(source)
        self.discover_vertex.fire(source)
        frontier.enqueue(source)

        while len(frontier):
            token.raise_if_cancelled()
            u = frontier.dequeue()
            self.counters["vertices_examined"] += 1
            self.examine_vertex.fire(u)

            if target is not None and u == target:
                self.target_reached.fire(u)
                if stop:
                    colors[u] = GraphColor.BLACK
                    self.finish_vertex.fire(u)
                    frontier.clear()
                    return True

            for e in self.graph.out_edges(u):
                self._examine(e)

            colors[u] = GraphColor.BLACK
            self.finish_vertex.fire(u)
        return False

    def _examine(self, e: Edge) -> None:
        frontier = self.frontier
        self.counters["edges_examined"] += 1
        self.examine_edge.fire(e)
        w = self.weights(e)
        if w < 0:
            raise NegativeWeightError(e, w)

        v = e.target
        color = self._paths.colors[v]
        if color is GraphColor.WHITE:
            if self._relax(e):
                self._paths.colors[v] = GraphColor.GRAY
                self._improved(v)
                self.discover_vertex.fire(v)
                frontier.enqueue(v)
                self.tree_edge.fire(e)
            else:
                self.edge_not_relaxed.fire(e)
        elif color is GraphColor.GRAY:
            if self._relax(e):
                self._improved(v)
                if v in frontier:
                    frontier.update(v)
                else:  # self-loop on the vertex being examined
                    frontier.enqueue(v)
                self.tree_edge.fire(e)
            else:
                self.edge_not_relaxed.fire(e)
        else:
            self._black_target(e)


__all__ = ["PriorityFrontierSearch"]
