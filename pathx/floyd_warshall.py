"""Floyd-Warshall all-pairs shortest paths."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np
import numpy.typing as npt

from .config import AlgorithmConfig
from .exceptions import AlgorithmError, InputError, NegativeCycleError, VertexNotFoundError
from .graph import Edge, Float, GraphProtocol, Vertex
from .lifecycle import AlgorithmBase, CancellationToken
from .logger import Logger
from .relaxers import DistanceRelaxer
from .state import WeightFn

Pair = Tuple[Vertex, Vertex]


@dataclass(frozen=True)
class _PathEntry:
    """Distance of a pair plus how it is realized.

    Exactly one of ``edge`` and ``via`` is set, except for the zero-distance
    entry of a vertex to itself, which has neither.
    """

    distance: Float
    edge: Optional[Edge] = None
    via: Optional[Vertex] = None


class FloydWarshallAllShortestPaths(AlgorithmBase):
    """All-pairs shortest paths over a pair-keyed table.

    Each table entry stores either the edge realizing the pair or an
    intermediate vertex ``k`` whose two sub-paths realize it. After the
    ``k`` sweeps, a vertex with a negative distance to itself raises
    :class:`~pathx.exceptions.NegativeCycleError` unless
    ``config.check_negative_cycles`` is off.

    Examples:
        ```python
        >>> from pathx import Graph
        >>> g = Graph.from_edges([("A", "B", 1.0), ("B", "C", 2.0)])
        >>> fw = FloydWarshallAllShortestPaths(g, g.weight)
        >>> fw.compute()
        >>> fw.get_distance("A", "C")
        3.0
        >>> [str(e) for e in fw.try_get_path("A", "C")]
        ['A->B', 'B->C']
        ```
    """

    name = "floyd_warshall"

    def __init__(
        self,
        graph: GraphProtocol,
        weights: WeightFn,
        distance_relaxer: Optional[DistanceRelaxer] = None,
        config: Optional[AlgorithmConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialize the algorithm.

        Raises:
            InputError: If ``graph`` or ``weights`` is missing.
        """
        super().__init__(graph, distance_relaxer, config, logger)
        if weights is None or not callable(weights):
            raise InputError("weights must be a callable Edge -> float.")
        self.weights = weights
        self._table: Dict[Pair, _PathEntry] = {}

    # ---- computation --------------------------------------------------

    def _initialize(self) -> None:
        table: Dict[Pair, _PathEntry] = {}
        for u in self.graph.vertices:
            for e in self.graph.out_edges(u):
                self.counters["edges_examined"] += 1
                w = self.weights(e)
                ij = (e.source, e.target)
                entry = table.get(ij)
                if entry is None or w < entry.distance:
                    table[ij] = _PathEntry(w, edge=e)
        self._table = table

    def _compute(self, token: CancellationToken) -> None:
        table = self._table
        relaxer = self.distance_relaxer
        vertices = list(self.graph.vertices)
        for v in vertices:
            table[(v, v)] = _PathEntry(0.0)

        for k in vertices:
            token.raise_if_cancelled()
            self.counters["vertices_examined"] += 1
            for i in vertices:
                ik = table.get((i, k))
                if ik is None:
                    continue
                for j in vertices:
                    kj = table.get((k, j))
                    if kj is None:
                        continue
                    combined = relaxer.combine(ik.distance, kj.distance)
                    ij = table.get((i, j))
                    if ij is None or relaxer.compare(combined, ij.distance) < 0:
                        table[(i, j)] = _PathEntry(combined, via=k)
                        self.counters["edges_relaxed"] += 1

        if self.config.check_negative_cycles:
            for v in vertices:
                if table[(v, v)].distance < 0:
                    self.logger.warning("floyd_warshall.negative_cycle", vertex=v)
                    raise NegativeCycleError(v)

    # ---- queries ------------------------------------------------------

    def try_get_distance(self, source: Vertex, target: Vertex) -> Optional[Float]:
        """Return the distance from ``source`` to ``target`` or ``None``."""
        try:
            entry = self._table.get((source, target))
        except TypeError:
            return None
        return None if entry is None else entry.distance

    def get_distance(self, source: Vertex, target: Vertex) -> Float:
        """Return the distance from ``source`` to ``target``.

        Raises:
            VertexNotFoundError: If the pair has no entry.
        """
        d = self.try_get_distance(source, target)
        if d is None:
            raise VertexNotFoundError(f"no distance from {source!r} to {target!r}", target)
        return d

    def get_distances(self) -> List[Tuple[Pair, Float]]:
        """Return ``((source, target), distance)`` for every realized pair."""
        return [(pair, entry.distance) for pair, entry in self._table.items()]

    def try_get_path(self, source: Vertex, target: Vertex) -> Optional[List[Edge]]:
        """Return the edges of the path from ``source`` to ``target``.

        Returns:
            The path edges in order, or ``None`` when ``source == target``,
            no entry covers a required pair, or the entries loop through a
            negative cycle (possible with ``check_negative_cycles=False``).
        """
        if source == target:
            return None
        edges: List[Edge] = []
        todo: List[Pair] = [(source, target)]
        expanded: Set[Pair] = set()
        while todo:
            current = todo.pop()
            if current in expanded:
                return None
            expanded.add(current)
            entry = self._table.get(current)
            if entry is None:
                return None
            if entry.edge is not None:
                edges.append(entry.edge)
            elif entry.via is not None:
                k = entry.via
                todo.append((k, current[1]))
                todo.append((current[0], k))
            else:
                raise AlgorithmError(f"cannot expand path entry {current!r}")
        return edges

    def distance_matrix(self, order: Optional[Sequence[Vertex]] = None) -> npt.NDArray[np.float64]:
        """Return the distances as a dense matrix.

        Args:
            order: Row/column vertex order; the graph's vertex order by default.

        Returns:
            ``float64`` matrix with ``inf`` for pairs without a path.
        """
        verts = list(self.graph.vertices) if order is None else list(order)
        out = np.full((len(verts), len(verts)), math.inf, dtype=np.float64)
        for r, u in enumerate(verts):
            for c, v in enumerate(verts):
                entry = self._table.get((u, v))
                if entry is not None:
                    out[r, c] = entry.distance
        return out


__all__ = ["FloydWarshallAllShortestPaths"]
