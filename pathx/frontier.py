"""Priority frontier used by the best-first traversals."""

from __future__ import annotations

import itertools
from typing import Callable, Dict, Iterator, List, Protocol

from .exceptions import AlgorithmError
from .graph import Float, Vertex


class FrontierProtocol(Protocol):
    """Protocol for frontier structures consumed by the search."""

    def enqueue(self, vertex: Vertex) -> None:
        """Insert ``vertex`` with its current priority."""
        ...

    def dequeue(self) -> Vertex:
        """Remove and return the best vertex."""
        ...

    def update(self, vertex: Vertex) -> None:
        """Reposition ``vertex`` after its priority changed."""
        ...

    def clear(self) -> None:
        """Drop every queued vertex."""
        ...

    def __contains__(self, vertex: object) -> bool: ...

    def __len__(self) -> int: ...


def _ascending(a: Float, b: Float) -> int:
    return (a > b) - (a < b)


class IndexedHeapFrontier:
    """Binary heap with a vertex-to-slot index.

    Priorities are read through ``priority(vertex)`` when a vertex is
    enqueued or updated and cached until the next update. ``compare`` orders
    two priorities like a relaxer does; ties dequeue in insertion order.

    Args:
        priority: Returns the current priority of a vertex.
        compare: Three-way comparison of priorities, ascending by default.
    """

    def __init__(
        self,
        priority: Callable[[Vertex], Float],
        compare: Callable[[Float, Float], int] = _ascending,
    ) -> None:
        self.priority = priority
        self.compare = compare
        self._heap: List[Vertex] = []
        self._slot: Dict[Vertex, int] = {}
        self._key: Dict[Vertex, Float] = {}
        self._seq: Dict[Vertex, int] = {}
        self._counter = itertools.count()

    # ---- internals ----------------------------------------------------

    def _less(self, a: Vertex, b: Vertex) -> bool:
        c = self.compare(self._key[a], self._key[b])
        if c != 0:
            return c < 0
        return self._seq[a] < self._seq[b]

    def _swap(self, i: int, j: int) -> None:
        h = self._heap
        h[i], h[j] = h[j], h[i]
        self._slot[h[i]] = i
        self._slot[h[j]] = j

    def _sift_up(self, i: int) -> None:
        h = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(h[i], h[parent]):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        h = self._heap
        n = len(h)
        while True:
            left = 2 * i + 1
            best = i
            if left < n and self._less(h[left], h[best]):
                best = left
            if left + 1 < n and self._less(h[left + 1], h[best]):
                best = left + 1
            if best == i:
                return
            self._swap(i, best)
            i = best

    # ---- public API ---------------------------------------------------

    def enqueue(self, vertex: Vertex) -> None:
        """Insert ``vertex``.

        Raises:
            AlgorithmError: If the vertex is already queued.
        """
        if vertex in self._slot:
            raise AlgorithmError(f"vertex {vertex!r} already in frontier")
        self._key[vertex] = self.priority(vertex)
        self._seq[vertex] = next(self._counter)
        self._heap.append(vertex)
        self._slot[vertex] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def dequeue(self) -> Vertex:
        """Remove and return the vertex with the best priority.

        Raises:
            IndexError: If the frontier is empty.
        """
        h = self._heap
        if not h:
            raise IndexError("dequeue from empty frontier")
        top = h[0]
        last = h.pop()
        if h:
            h[0] = last
            self._slot[last] = 0
            self._sift_down(0)
        del self._slot[top]
        del self._key[top]
        del self._seq[top]
        return top

    def peek(self) -> Vertex:
        """Return the best vertex without removing it."""
        if not self._heap:
            raise IndexError("peek on empty frontier")
        return self._heap[0]

    def update(self, vertex: Vertex) -> None:
        """Re-read the priority of a queued ``vertex`` and restore heap order.

        Raises:
            AlgorithmError: If the vertex is not queued.
        """
        try:
            i = self._slot[vertex]
        except KeyError:
            raise AlgorithmError(f"vertex {vertex!r} not in frontier") from None
        self._key[vertex] = self.priority(vertex)
        self._sift_up(i)
        self._sift_down(self._slot[vertex])

    def clear(self) -> None:
        self._heap.clear()
        self._slot.clear()
        self._key.clear()
        self._seq.clear()

    def __contains__(self, vertex: object) -> bool:
        try:
            return vertex in self._slot
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[Vertex]:
        """Iterate over queued vertices in heap (not priority) order."""
        return iter(list(self._heap))


__all__ = ["FrontierProtocol", "IndexedHeapFrontier"]
