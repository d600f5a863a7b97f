"""Root and target bookkeeping for single-source computations."""

from __future__ import annotations

from typing import Optional

from .events import Event
from .exceptions import VertexNotFoundError
from .graph import GraphProtocol, Vertex


class RootedComputation:
    """Optional root and target vertices with change notifications.

    ``root_changed`` and ``target_changed`` fire with the new value (``None``
    when cleared) and only when the value actually changes. Both vertices are
    validated against the graph when set, so a bad vertex is rejected before
    any computation starts.
    """

    def __init__(self, graph: GraphProtocol) -> None:
        self.graph = graph
        self._root: Optional[Vertex] = None
        self._target: Optional[Vertex] = None
        self.root_changed = Event("root_changed")
        self.target_changed = Event("target_changed")

    def _check(self, vertex: Vertex, what: str) -> None:
        if vertex is None:
            raise VertexNotFoundError(f"{what} must not be None", vertex)
        if not self.graph.contains_vertex(vertex):
            raise VertexNotFoundError(f"{what} {vertex!r} not in graph", vertex)

    # ---- root ---------------------------------------------------------

    @property
    def has_root(self) -> bool:
        return self._root is not None

    def try_get_root(self) -> Optional[Vertex]:
        """Return the root, or ``None`` when unset."""
        return self._root

    def set_root(self, vertex: Vertex) -> None:
        """Set the root vertex.

        Raises:
            VertexNotFoundError: If ``vertex`` is not in the graph.
        """
        self._check(vertex, "root")
        if self._root is None or self._root != vertex:
            self._root = vertex
            self.root_changed.fire(vertex)

    def clear_root(self) -> None:
        if self._root is not None:
            self._root = None
            self.root_changed.fire(None)

    # ---- target -------------------------------------------------------

    @property
    def has_target(self) -> bool:
        return self._target is not None

    def try_get_target(self) -> Optional[Vertex]:
        """Return the target, or ``None`` when unset."""
        return self._target

    def set_target(self, vertex: Vertex) -> None:
        """Set the target vertex.

        Raises:
            VertexNotFoundError: If ``vertex`` is not in the graph.
        """
        self._check(vertex, "target")
        if self._target is None or self._target != vertex:
            self._target = vertex
            self.target_changed.fire(vertex)

    def clear_target(self) -> None:
        if self._target is not None:
            self._target = None
            self.target_changed.fire(None)


__all__ = ["RootedComputation"]
