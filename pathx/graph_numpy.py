"""NumPy-backed graph representation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

import numpy as np
import numpy.typing as npt

from .exceptions import InputError, VertexNotFoundError
from .graph import Edge, Float, Graph, Vertex, WeightedEdge


@dataclass
class ArrayGraph:
    """Immutable directed graph over vertices ``0 .. n-1`` stored in NumPy arrays.

    Edges are kept in compressed sparse row order: ``offsets[u]`` ..
    ``offsets[u + 1]`` index the out-edges of ``u`` in ``targets`` and
    ``weights``. Each :class:`~pathx.graph.Edge` carries its row index as
    ``key``, so parallel edges stay distinct and :meth:`weight` is an array
    lookup.
    """

    n: int
    sources: npt.NDArray[np.int64] = field(repr=False)
    targets: npt.NDArray[np.int64] = field(repr=False)
    weights: npt.NDArray[np.float64] = field(repr=False)

    def __post_init__(self) -> None:
        """Validate the arrays and build the row offsets."""
        if not isinstance(self.n, int) or self.n <= 0:
            raise InputError("ArrayGraph.n must be a positive integer.")
        if not (len(self.sources) == len(self.targets) == len(self.weights)):
            raise InputError("sources, targets and weights must have the same length.")
        if len(self.sources) and (
            self.sources.min() < 0
            or self.targets.min() < 0
            or self.sources.max() >= self.n
            or self.targets.max() >= self.n
        ):
            raise InputError("edge endpoints must be vertex ids in [0, n).")
        order = np.argsort(self.sources, kind="stable")
        self.sources = self.sources[order]
        self.targets = self.targets[order]
        self.weights = self.weights[order]
        counts = np.bincount(self.sources, minlength=self.n)
        self.offsets: npt.NDArray[np.int64] = np.concatenate(([0], np.cumsum(counts))).astype(np.int64)

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[WeightedEdge]) -> "ArrayGraph":
        """Construct a graph from an iterable of ``(u, v, w)`` edges."""
        rows = [(int(u), int(v), float(w)) for u, v, w in edges]
        if rows:
            arr = np.array(rows, dtype=np.float64)
            src = arr[:, 0].astype(np.int64)
            dst = arr[:, 1].astype(np.int64)
            w = arr[:, 2].astype(np.float64)
        else:
            src = np.zeros(0, dtype=np.int64)
            dst = np.zeros(0, dtype=np.int64)
            w = np.zeros(0, dtype=np.float64)
        return cls(n, src, dst, w)

    @classmethod
    def from_matrix(cls, matrix: npt.ArrayLike) -> "ArrayGraph":
        """Construct a graph from a dense weight matrix.

        Entries equal to ``inf`` or ``nan`` mean "no edge".
        """
        m = np.asarray(matrix, dtype=np.float64)
        if m.ndim != 2 or m.shape[0] != m.shape[1]:
            raise InputError("weight matrix must be square.")
        mask = np.isfinite(m)
        src, dst = np.nonzero(mask)
        return cls(int(m.shape[0]), src.astype(np.int64), dst.astype(np.int64), m[mask])

    def _check(self, vertex: Vertex) -> int:
        if not self.contains_vertex(vertex):
            raise VertexNotFoundError(f"vertex {vertex!r} not in graph", vertex)
        return int(vertex)  # type: ignore[call-overload]

    def _edge(self, i: int) -> Edge:
        return Edge(int(self.sources[i]), int(self.targets[i]), i)

    @property
    def vertices(self) -> range:
        """Vertex ids ``0 .. n-1``."""
        return range(self.n)

    @property
    def vertex_count(self) -> int:
        """Number of vertices."""
        return self.n

    @property
    def edges(self) -> List[Edge]:
        """All edges in row order."""
        return [self._edge(i) for i in range(len(self.sources))]

    @property
    def edge_count(self) -> int:
        """Number of edges."""
        return int(len(self.sources))

    def out_edges(self, vertex: Vertex) -> List[Edge]:
        """Return the edges leaving ``vertex``."""
        u = self._check(vertex)
        return [self._edge(i) for i in range(int(self.offsets[u]), int(self.offsets[u + 1]))]

    def out_degree(self, vertex: Vertex) -> int:
        """Return the out-degree of ``vertex``."""
        u = self._check(vertex)
        return int(self.offsets[u + 1] - self.offsets[u])

    def contains_vertex(self, vertex: Vertex) -> bool:
        """Return ``True`` for integer ids in ``[0, n)``."""
        return isinstance(vertex, (int, np.integer)) and not isinstance(vertex, bool) and 0 <= vertex < self.n

    def contains_edge(self, edge: Edge) -> bool:
        """Return ``True`` if ``edge`` is one of this graph's rows."""
        i = edge.key
        return (
            isinstance(i, int)
            and 0 <= i < len(self.sources)
            and int(self.sources[i]) == edge.source
            and int(self.targets[i]) == edge.target
        )

    def weight(self, edge: Edge) -> Float:
        """Return the weight of ``edge``; usable as an algorithm weight function."""
        if not self.contains_edge(edge):
            raise InputError(f"edge {edge} not in graph")
        return float(self.weights[edge.key])

    def to_graph(self) -> Graph:
        """Return a :class:`~pathx.graph.Graph` copy of this graph."""
        edges = [
            (int(u), int(v), float(w)) for u, v, w in zip(self.sources, self.targets, self.weights)
        ]
        return Graph.from_edges(edges, vertices=range(self.n))


__all__ = ["ArrayGraph"]
