"""Utilities for reconstructing paths from predecessor-edge maps."""

from __future__ import annotations

from typing import Callable, Iterable, List, Mapping, Optional

from .graph import Edge, Float, Vertex


def reconstruct_path(
    predecessors: Mapping[Vertex, Edge],
    target: Vertex,
) -> Optional[List[Edge]]:
    """Return the edges from the root of the predecessor tree to ``target``.

    Args:
        predecessors: Maps each reached vertex to the edge that last improved
            it, as recorded by
            :class:`~pathx.observers.VertexPredecessorRecorder`.
        target: Vertex to reach.

    Returns:
        Edges from the root to ``target`` in order, or ``None`` if ``target``
        has no predecessor (it is the root or was never reached).

    Notes:
        A predecessor map captured after a negative cycle can loop; the walk
        stops and returns ``None`` when it revisits a vertex.
    """
    if target not in predecessors:
        return None
    path: List[Edge] = []
    seen = {target}
    cur = target
    while cur in predecessors:
        e = predecessors[cur]
        path.append(e)
        cur = e.source
        if cur in seen:
            return None
        seen.add(cur)
    path.reverse()
    return path


def path_weight(path: Iterable[Edge], weights: Callable[[Edge], Float]) -> Float:
    """Return the sum of ``weights`` over ``path``."""
    return sum((weights(e) for e in path), 0.0)


def path_vertices(path: List[Edge]) -> List[Vertex]:
    """Return the vertices visited by ``path``, endpoints included."""
    if not path:
        return []
    return [path[0].source] + [e.target for e in path]


__all__ = ["path_vertices", "path_weight", "reconstruct_path"]
