"""Topological ordering collaborator backed by :mod:`networkx`."""

from __future__ import annotations

from typing import Callable, List

import networkx as nx

from .exceptions import NotAcyclicError
from .graph import GraphProtocol, Vertex

TopologicalSorter = Callable[[GraphProtocol], List[Vertex]]


def to_networkx(graph: GraphProtocol) -> "nx.MultiDiGraph":
    """Return a :class:`networkx.MultiDiGraph` mirroring ``graph``'s structure.

    Vertices are added first so isolated ones keep their place in the order.
    Edges are taken from ``out_edges`` so undirected graphs show up with both
    orientations.
    """
    g = nx.MultiDiGraph()
    g.add_nodes_from(graph.vertices)
    for u in graph.vertices:
        for e in graph.out_edges(u):
            g.add_edge(e.source, e.target)
    return g


def topological_sort(graph: GraphProtocol) -> List[Vertex]:
    """Return the vertices of ``graph`` in topological order.

    Raises:
        NotAcyclicError: If the graph contains a cycle (self-loops included).
    """
    try:
        return list(nx.topological_sort(to_networkx(graph)))
    except nx.NetworkXUnfeasible as exc:
        raise NotAcyclicError("graph is not acyclic") from exc


__all__ = ["TopologicalSorter", "to_networkx", "topological_sort"]
