"""Public package exports for :mod:`pathx`."""

from __future__ import annotations

from .astar import AStarShortestPath
from .bellman_ford import BellmanFordShortestPath
from .config import DEFAULT_CONFIG, AlgorithmConfig
from .dag import DagShortestPath
from .dijkstra import DijkstraShortestPath
from .events import CompositeSubscription, Event, Subscription
from .exceptions import (
    AlgorithmError,
    ConfigError,
    InputError,
    NegativeCycleError,
    NegativeWeightError,
    NotAcyclicError,
    PathXError,
    VertexNotFoundError,
)
from .floyd_warshall import FloydWarshallAllShortestPaths
from .frontier import IndexedHeapFrontier
from .graph import Edge, Graph, GraphProtocol
from .graph_numpy import ArrayGraph
from .lifecycle import AlgorithmBase, CancellationToken, ComputationState
from .logger import BoundLogger, Logger, NoopLogger, StdLogger
from .metrics import AlgorithmMetrics
from .observers import VertexDistanceRecorder, VertexPredecessorRecorder, attach_all
from .path import path_weight, reconstruct_path
from .relaxers import CRITICAL, EDGE_COUNT, SHORTEST, DistanceRelaxer, get_relaxer
from .search import PriorityFrontierSearch
from .shortcuts import (
    shortest_paths_astar,
    shortest_paths_bellman_ford,
    shortest_paths_dag,
    shortest_paths_dijkstra,
)
from .state import GraphColor, ShortestPathAlgorithm
from .topology import topological_sort

__version__ = "0.1.0"

__all__ = [
    "AStarShortestPath",
    "AlgorithmBase",
    "AlgorithmConfig",
    "AlgorithmError",
    "AlgorithmMetrics",
    "ArrayGraph",
    "BellmanFordShortestPath",
    "BoundLogger",
    "CRITICAL",
    "CancellationToken",
    "CompositeSubscription",
    "ComputationState",
    "ConfigError",
    "DEFAULT_CONFIG",
    "DagShortestPath",
    "DijkstraShortestPath",
    "DistanceRelaxer",
    "EDGE_COUNT",
    "Edge",
    "Event",
    "FloydWarshallAllShortestPaths",
    "Graph",
    "GraphColor",
    "GraphProtocol",
    "IndexedHeapFrontier",
    "InputError",
    "Logger",
    "NegativeCycleError",
    "NegativeWeightError",
    "NoopLogger",
    "NotAcyclicError",
    "PathXError",
    "PriorityFrontierSearch",
    "SHORTEST",
    "ShortestPathAlgorithm",
    "StdLogger",
    "Subscription",
    "VertexDistanceRecorder",
    "VertexNotFoundError",
    "VertexPredecessorRecorder",
    "attach_all",
    "get_relaxer",
    "path_weight",
    "reconstruct_path",
    "shortest_paths_astar",
    "shortest_paths_bellman_ford",
    "shortest_paths_dag",
    "shortest_paths_dijkstra",
    "topological_sort",
]
