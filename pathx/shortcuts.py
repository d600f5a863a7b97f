"""One-call helpers returning path getters.

Each helper runs one algorithm from ``root`` with a
:class:`~pathx.observers.VertexPredecessorRecorder` attached and returns a
function mapping a target vertex to its path (``None`` when unreachable or
equal to the root).
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .astar import AStarShortestPath, Heuristic
from .bellman_ford import BellmanFordShortestPath
from .config import AlgorithmConfig
from .dag import DagShortestPath
from .dijkstra import DijkstraShortestPath
from .exceptions import NegativeCycleError
from .graph import Edge, GraphProtocol, Vertex
from .logger import Logger
from .observers import VertexPredecessorRecorder
from .relaxers import DistanceRelaxer
from .state import ShortestPathAlgorithm, WeightFn

PathGetter = Callable[[Vertex], Optional[List[Edge]]]


def _run(algorithm: ShortestPathAlgorithm, root: Vertex) -> VertexPredecessorRecorder:
    recorder = VertexPredecessorRecorder()
    with recorder.attach(algorithm):
        algorithm.compute(root)
    return recorder


def shortest_paths_dijkstra(
    graph: GraphProtocol,
    weights: WeightFn,
    root: Vertex,
    config: Optional[AlgorithmConfig] = None,
    logger: Optional[Logger] = None,
) -> PathGetter:
    """Run Dijkstra from ``root`` and return a path getter.

    Raises:
        VertexNotFoundError: If ``root`` is not in the graph.
        NegativeWeightError: If a reachable edge has a negative weight.
    """
    return _run(DijkstraShortestPath(graph, weights, config=config, logger=logger), root).path_to


def shortest_paths_astar(
    graph: GraphProtocol,
    weights: WeightFn,
    heuristic: Heuristic,
    root: Vertex,
    config: Optional[AlgorithmConfig] = None,
    logger: Optional[Logger] = None,
) -> PathGetter:
    """Run A* from ``root`` and return a path getter."""
    algo = AStarShortestPath(graph, weights, heuristic, config=config, logger=logger)
    return _run(algo, root).path_to


def shortest_paths_bellman_ford(
    graph: GraphProtocol,
    weights: WeightFn,
    root: Vertex,
    config: Optional[AlgorithmConfig] = None,
    logger: Optional[Logger] = None,
) -> PathGetter:
    """Run Bellman-Ford from ``root`` and return a path getter.

    Raises:
        NegativeCycleError: If the run found a negative cycle.
    """
    algo = BellmanFordShortestPath(graph, weights, config=config, logger=logger)
    recorder = _run(algo, root)
    if algo.found_negative_cycle:
        raise NegativeCycleError()
    return recorder.path_to


def shortest_paths_dag(
    graph: GraphProtocol,
    weights: WeightFn,
    root: Vertex,
    distance_relaxer: Optional[DistanceRelaxer] = None,
    config: Optional[AlgorithmConfig] = None,
    logger: Optional[Logger] = None,
) -> PathGetter:
    """Run the DAG algorithm from ``root`` and return a path getter.

    Pass :data:`~pathx.relaxers.CRITICAL` as ``distance_relaxer`` for
    critical (longest) paths.

    Raises:
        NotAcyclicError: If the graph has a cycle.
    """
    algo = DagShortestPath(graph, weights, distance_relaxer, config=config, logger=logger)
    return _run(algo, root).path_to


__all__ = [
    "PathGetter",
    "shortest_paths_astar",
    "shortest_paths_bellman_ford",
    "shortest_paths_dag",
    "shortest_paths_dijkstra",
]
