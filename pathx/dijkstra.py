"""Dijkstra's single-source shortest paths."""

from __future__ import annotations

from .search import PriorityFrontierSearch


class DijkstraShortestPath(PriorityFrontierSearch):
    """Dijkstra's algorithm on the priority-frontier traversal.

    Edge weights must be non-negative; a negative weight raises
    :class:`~pathx.exceptions.NegativeWeightError` when its edge is examined.
    BLACK vertices have final distances, so edges into them are reported as
    not relaxed. Runs in ``O((V + E) log V)``.

    Examples:
        ```python
        >>> from pathx import Graph
        >>> g = Graph.from_edges([("A", "B", 2.0), ("B", "C", 1.0)])
        >>> algo = DijkstraShortestPath(g, g.weight)
        >>> algo.compute("A")
        >>> algo.get_distance("C")
        3.0
        ```
    """

    name = "dijkstra"


__all__ = ["DijkstraShortestPath"]
