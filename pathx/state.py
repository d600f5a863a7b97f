"""Per-run distance and color bookkeeping for single-source algorithms."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .config import AlgorithmConfig
from .events import Event
from .exceptions import InputError, VertexNotFoundError
from .graph import Edge, Float, GraphProtocol, Vertex
from .lifecycle import AlgorithmBase
from .logger import Logger
from .relaxers import DistanceRelaxer
from .rooted import RootedComputation

WeightFn = Callable[[Edge], Float]


class GraphColor(Enum):
    """Traversal color: undiscovered, on the frontier, settled."""

    WHITE = "white"
    GRAY = "gray"
    BLACK = "black"


class ShortestPathState:
    """Distance map, color map and the ``relax`` operator.

    Maps are replaced wholesale by :meth:`reset`, so views handed out after a
    run stay valid until the next run starts.
    """

    def __init__(self, weights: WeightFn, relaxer: DistanceRelaxer) -> None:
        self.weights = weights
        self.relaxer = relaxer
        self.distances: Dict[Vertex, Float] = {}
        self.colors: Dict[Vertex, GraphColor] = {}

    def reset(self, vertices: Iterable[Vertex]) -> None:
        """Set every vertex WHITE at the relaxer's initial distance."""
        init = self.relaxer.initial_distance
        self.distances = {}
        self.colors = {}
        for v in vertices:
            self.distances[v] = init
            self.colors[v] = GraphColor.WHITE

    def relax(self, edge: Edge) -> bool:
        """Try to improve ``edge.target`` through ``edge``.

        Returns:
            ``True`` if the target distance was strictly improved and stored.
        """
        du = self.distances[edge.source]
        dv = self.distances[edge.target]
        candidate = self.relaxer.combine(du, self.weights(edge))
        if self.relaxer.compare(candidate, dv) < 0:
            self.distances[edge.target] = candidate
            return True
        return False


class ShortestPathAlgorithm(AlgorithmBase):
    """Base of the single-source algorithms (Dijkstra, A*, Bellman-Ford, DAG).

    Holds a :class:`RootedComputation` and a :class:`ShortestPathState` and
    exposes the shared events and queries.
    """

    def __init__(
        self,
        graph: GraphProtocol,
        weights: WeightFn,
        distance_relaxer: Optional[DistanceRelaxer] = None,
        config: Optional[AlgorithmConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialize the algorithm.

        Args:
            graph: Read-only graph capability.
            weights: Edge weight function.
            distance_relaxer: Relaxer; resolved from ``config`` when ``None``.
            config: Algorithm configuration.
            logger: Optional logger.

        Raises:
            InputError: If ``graph`` or ``weights`` is missing.
        """
        super().__init__(graph, distance_relaxer, config, logger)
        if weights is None or not callable(weights):
            raise InputError("weights must be a callable Edge -> float.")
        self.weights = weights
        self._rooted = RootedComputation(graph)
        self._paths = ShortestPathState(weights, self.distance_relaxer)

        self.root_changed = self._rooted.root_changed
        self.initialize_vertex = Event("initialize_vertex")
        self.examine_edge = Event("examine_edge")
        self.tree_edge = Event("tree_edge")
        self.edge_not_relaxed = Event("edge_not_relaxed")

    # ---- root ---------------------------------------------------------

    def set_root(self, vertex: Vertex) -> None:
        self._rooted.set_root(vertex)

    def clear_root(self) -> None:
        self._rooted.clear_root()

    def try_get_root(self) -> Optional[Vertex]:
        return self._rooted.try_get_root()

    def compute(self, root: Optional[Vertex] = None) -> None:  # type: ignore[override]
        """Run the algorithm, optionally setting the root first.

        Raises:
            VertexNotFoundError: If ``root`` is not in the graph.
        """
        if root is not None:
            self.set_root(root)
        super().compute()

    # ---- per-run state ------------------------------------------------

    def _initialize(self) -> None:
        self._paths.reset(self.graph.vertices)
        if len(self.initialize_vertex):
            for v in self._paths.colors:
                self.initialize_vertex.fire(v)

    def _relax(self, edge: Edge) -> bool:
        if self._paths.relax(edge):
            self.counters["edges_relaxed"] += 1
            return True
        return False

    # ---- queries ------------------------------------------------------

    @property
    def distances(self) -> Mapping[Vertex, Float]:
        """Read-only view of the distance map of the last run."""
        return MappingProxyType(self._paths.distances)

    def try_get_distance(self, vertex: Vertex) -> Optional[Float]:
        """Return the distance of ``vertex``, or ``None`` if it has none."""
        try:
            return self._paths.distances.get(vertex)
        except TypeError:
            return None

    def get_distance(self, vertex: Vertex) -> Float:
        """Return the distance of ``vertex``.

        Raises:
            VertexNotFoundError: If the vertex has no distance in this run.
        """
        d = self.try_get_distance(vertex)
        if d is None:
            raise VertexNotFoundError(f"no distance for vertex {vertex!r}", vertex)
        return d

    def get_distances(self) -> List[Tuple[Vertex, Float]]:
        """Return ``(vertex, distance)`` pairs; empty before the first run."""
        return list(self._paths.distances.items())

    def get_vertex_color(self, vertex: Vertex) -> GraphColor:
        """Return the color of ``vertex`` in the last run.

        Raises:
            VertexNotFoundError: If the vertex was not part of the run.
        """
        try:
            return self._paths.colors[vertex]
        except (KeyError, TypeError):
            raise VertexNotFoundError(f"no color for vertex {vertex!r}", vertex) from None


__all__ = ["GraphColor", "ShortestPathAlgorithm", "ShortestPathState", "WeightFn"]
