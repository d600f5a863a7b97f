"""Recorders that build derived structures from algorithm notifications.

Observers never read the algorithm's internal maps. They subscribe to its
events and keep their own dictionaries; :meth:`attach` returns a
:class:`~pathx.events.Subscription` that detaches them again::

    recorder = VertexPredecessorRecorder()
    with recorder.attach(algo):
        algo.compute("A")
    recorder.path_to("E")
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .events import CompositeSubscription, Subscription
from .exceptions import InputError
from .graph import Edge, Float, Vertex
from .path import reconstruct_path
from .relaxers import SHORTEST, DistanceRelaxer
from .state import WeightFn


def _require_event(algorithm: Any, name: str) -> Any:
    if algorithm is None:
        raise InputError("algorithm must not be None.")
    event = getattr(algorithm, name, None)
    if event is None:
        raise InputError(f"{type(algorithm).__name__} has no '{name}' event.")
    return event


class VertexPredecessorRecorder:
    """Records, for each vertex, the last tree edge that reached it.

    Args:
        predecessors: Optional dict to fill; a new one is created otherwise.
    """

    def __init__(self, predecessors: Optional[Dict[Vertex, Edge]] = None) -> None:
        self.predecessors: Dict[Vertex, Edge] = {} if predecessors is None else predecessors

    def attach(self, algorithm: Any) -> Subscription:
        """Subscribe to ``algorithm.tree_edge``.

        Raises:
            InputError: If the algorithm has no ``tree_edge`` event.
        """
        return _require_event(algorithm, "tree_edge").subscribe(self._on_tree_edge)

    def _on_tree_edge(self, edge: Edge) -> None:
        self.predecessors[edge.target] = edge

    def path_to(self, vertex: Vertex) -> Optional[List[Edge]]:
        """Return the recorded path ending at ``vertex``, or ``None``."""
        return reconstruct_path(self.predecessors, vertex)

    def clear(self) -> None:
        self.predecessors.clear()


class VertexDistanceRecorder:
    """Accumulates distances along tree edges.

    The source of the first tree edge seen gets distance ``0``; every tree
    edge then sets ``distance[target] = combine(distance[source], w)``.

    Args:
        weights: Edge weight function.
        distance_relaxer: Relaxer whose ``combine`` extends distances.
        distances: Optional dict to fill.
    """

    def __init__(
        self,
        weights: WeightFn,
        distance_relaxer: DistanceRelaxer = SHORTEST,
        distances: Optional[Dict[Vertex, Float]] = None,
    ) -> None:
        if weights is None or not callable(weights):
            raise InputError("weights must be a callable Edge -> float.")
        if distance_relaxer is None:
            raise InputError("distance_relaxer must not be None.")
        self.weights = weights
        self.distance_relaxer = distance_relaxer
        self.distances: Dict[Vertex, Float] = {} if distances is None else distances

    def attach(self, algorithm: Any) -> Subscription:
        """Subscribe to ``algorithm.tree_edge``."""
        return _require_event(algorithm, "tree_edge").subscribe(self._on_tree_edge)

    def _on_tree_edge(self, edge: Edge) -> None:
        source = self.distances.setdefault(edge.source, 0.0)
        self.distances[edge.target] = self.distance_relaxer.combine(source, self.weights(edge))

    def clear(self) -> None:
        self.distances.clear()


def attach_all(algorithm: Any, *observers: Any) -> CompositeSubscription:
    """Attach every observer to ``algorithm`` and return one handle for all."""
    subscriptions = CompositeSubscription()
    try:
        for observer in observers:
            subscriptions.add(observer.attach(algorithm))
    except BaseException:
        subscriptions.release()
        raise
    return subscriptions


__all__ = ["VertexDistanceRecorder", "VertexPredecessorRecorder", "attach_all"]
