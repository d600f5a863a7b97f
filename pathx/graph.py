"""Read-only graph capability consumed by the algorithms, plus a simple container.

The algorithms only need :class:`GraphProtocol`. :class:`Graph` is a small
adjacency-list implementation used by the helpers and the tests; any object
with the same methods works.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Protocol, Tuple

from .exceptions import InputError, VertexNotFoundError

Vertex = Hashable
Float = float
WeightedEdge = Tuple[Vertex, Vertex, Float]


@dataclass(frozen=True)
class Edge:
    """Directed edge with value equality.

    Attributes:
        source: Tail vertex.
        target: Head vertex.
        key: Optional discriminator for parallel edges.
    """

    source: Vertex
    target: Vertex
    key: Hashable = None

    def reversed(self) -> "Edge":
        """Return the same edge walked from ``target`` to ``source``."""
        return Edge(self.target, self.source, self.key)

    def __str__(self) -> str:
        if self.key is None:
            return f"{self.source}->{self.target}"
        return f"{self.source}->{self.target}[{self.key}]"


class GraphProtocol(Protocol):
    """Capability the algorithms read from; they never mutate it."""

    @property
    def vertices(self) -> Iterable[Vertex]:
        """All vertices, in a stable order."""
        ...

    @property
    def vertex_count(self) -> int:
        """Number of vertices."""
        ...

    @property
    def edges(self) -> Iterable[Edge]:
        """All edges, in a stable order."""
        ...

    @property
    def edge_count(self) -> int:
        """Number of edges."""
        ...

    def out_edges(self, vertex: Vertex) -> Iterable[Edge]:
        """Edges leaving ``vertex``."""
        ...

    def contains_vertex(self, vertex: Vertex) -> bool:
        """Return ``True`` if ``vertex`` belongs to the graph."""
        ...

    def contains_edge(self, edge: Edge) -> bool:
        """Return ``True`` if ``edge`` belongs to the graph."""
        ...


class Graph:
    """Adjacency-list graph with optional per-edge weights.

    Vertices keep insertion order, which makes every traversal deterministic.
    In an undirected graph each edge is stored once and reported by
    :meth:`out_edges` from both endpoints, oriented away from the queried
    vertex.

    Negative weights are accepted; it is up to the algorithm to reject them.
    """

    def __init__(self, directed: bool = True) -> None:
        """Initialize an empty graph.

        Args:
            directed: If ``False``, edges can be walked in both directions.
        """
        self.directed = directed
        self._out: Dict[Vertex, List[Edge]] = {}
        self._edges: List[Edge] = []
        self._weights: Dict[Edge, Float] = {}

    # ---- construction -------------------------------------------------

    def add_vertex(self, vertex: Vertex) -> None:
        """Add ``vertex`` if it is not present yet."""
        if vertex is None:
            raise InputError("vertex must not be None.")
        if vertex not in self._out:
            self._out[vertex] = []

    def add_vertices(self, vertices: Iterable[Vertex]) -> None:
        """Add every vertex of ``vertices``."""
        for v in vertices:
            self.add_vertex(v)

    def add_edge(
        self,
        source: Vertex,
        target: Vertex,
        weight: Float = 1.0,
        key: Hashable = None,
    ) -> Edge:
        """Add an edge, creating missing endpoints.

        Args:
            source: Tail vertex.
            target: Head vertex.
            weight: Edge weight returned by :meth:`weight`.
            key: Discriminator for parallel edges. When ``None`` and an edge
                between the same endpoints exists, the next free integer key
                is used.

        Returns:
            The stored edge.

        Raises:
            InputError: If ``weight`` is not numeric or the exact edge exists.
        """
        if not isinstance(weight, (int, float)):
            raise InputError(f"non-numeric weight {weight!r} on edge ({source}, {target})")
        self.add_vertex(source)
        self.add_vertex(target)
        edge = Edge(source, target, key)
        if key is None and self._has_endpoints(edge):
            n = 1
            while self._has_endpoints(Edge(source, target, n)):
                n += 1
            edge = Edge(source, target, n)
        elif self.contains_edge(edge):
            raise InputError(f"edge {edge} already exists.")
        self._edges.append(edge)
        self._weights[edge] = float(weight)
        self._out[source].append(edge)
        if not self.directed and source != target:
            self._out[target].append(edge.reversed())
        return edge

    def _has_endpoints(self, edge: Edge) -> bool:
        return edge in self._weights or (not self.directed and edge.reversed() in self._weights)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[WeightedEdge],
        directed: bool = True,
        vertices: Optional[Iterable[Vertex]] = None,
    ) -> "Graph":
        """Create a graph from an iterable of ``(u, v, w)`` tuples.

        Args:
            edges: Weighted edges to insert in order.
            directed: Whether the graph is directed.
            vertices: Optional vertices to add first (e.g. isolated ones).

        Returns:
            A graph populated with the provided edges.

        Examples:
            ```python
            >>> g = Graph.from_edges([("A", "B", 2.0)])
            >>> [str(e) for e in g.edges]
            ['A->B']
            ```
        """
        g = cls(directed=directed)
        if vertices is not None:
            g.add_vertices(vertices)
        for u, v, w in edges:
            g.add_edge(u, v, w)
        return g

    # ---- read-only capability -----------------------------------------

    @property
    def vertices(self) -> List[Vertex]:
        """All vertices in insertion order."""
        return list(self._out)

    @property
    def vertex_count(self) -> int:
        """Number of vertices."""
        return len(self._out)

    @property
    def edges(self) -> List[Edge]:
        """All edges in insertion order (each undirected edge once)."""
        return list(self._edges)

    @property
    def edge_count(self) -> int:
        """Number of edges."""
        return len(self._edges)

    def out_edges(self, vertex: Vertex) -> List[Edge]:
        """Return the edges leaving ``vertex``.

        Raises:
            VertexNotFoundError: If ``vertex`` is not in the graph.
        """
        try:
            return list(self._out[vertex])
        except KeyError:
            raise VertexNotFoundError(f"vertex {vertex!r} not in graph", vertex) from None

    def out_degree(self, vertex: Vertex) -> int:
        """Return the number of edges leaving ``vertex``."""
        return len(self.out_edges(vertex))

    def contains_vertex(self, vertex: Vertex) -> bool:
        """Return ``True`` if ``vertex`` belongs to the graph."""
        try:
            return vertex in self._out
        except TypeError:  # unhashable
            return False

    def contains_edge(self, edge: Edge) -> bool:
        """Return ``True`` if ``edge`` (or its reverse when undirected) exists."""
        if edge in self._weights:
            return True
        return not self.directed and edge.reversed() in self._weights

    def weight(self, edge: Edge) -> Float:
        """Return the stored weight of ``edge``.

        Usable directly as the weight function of an algorithm.

        Raises:
            InputError: If the edge is unknown.
        """
        w = self._weights.get(edge)
        if w is None and not self.directed:
            w = self._weights.get(edge.reversed())
        if w is None:
            raise InputError(f"edge {edge} not in graph")
        return w

    def iter_weighted_edges(self) -> Iterator[WeightedEdge]:
        """Yield ``(u, v, w)`` for every stored edge."""
        for e in self._edges:
            yield e.source, e.target, self._weights[e]

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, n={self.vertex_count}, m={self.edge_count})"


__all__ = ["Edge", "Float", "Graph", "GraphProtocol", "Vertex", "WeightedEdge"]
