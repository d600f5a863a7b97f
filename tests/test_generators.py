"""Tests for the seeded graph generators."""

import pytest

from pathx import InputError, topological_sort
from pathx.generators import grid_graph, random_dag, random_graph


class TestGenerators:
    """Tests for random_graph, random_dag and grid_graph."""

    def test_random_graph_is_deterministic(self):
        """The same seed gives the same graph."""
        a = random_graph(20, 60, seed=7)
        b = random_graph(20, 60, seed=7)
        assert list(a.iter_weighted_edges()) == list(b.iter_weighted_edges())

    def test_random_graph_shape(self):
        """Edge count, weight range and no self-loops or parallel edges."""
        g = random_graph(20, 60, seed=3, w_min=2, w_max=9)
        edges = list(g.iter_weighted_edges())
        assert g.vertex_count == 20
        assert len(edges) == 60
        assert all(2 <= w <= 9 for _, _, w in edges)
        assert all(u != v for u, v, _ in edges)
        assert len({(u, v) for u, v, _ in edges}) == 60

    def test_backbone_makes_everything_reachable(self):
        """With the backbone every vertex is reachable from 0."""
        g = random_graph(10, 0, seed=0)
        assert [(u, v) for u, v, _ in g.iter_weighted_edges()] == [(i, i + 1) for i in range(9)]

    def test_edge_count_is_capped(self):
        """Requesting more edges than possible yields the complete graph."""
        g = random_graph(4, 100, seed=0)
        assert g.edge_count == 12

    def test_random_dag_is_acyclic(self):
        """random_dag edges only go forward."""
        g = random_dag(25, 80, seed=2, w_min=-5, w_max=5)
        assert all(u < v for u, v, _ in g.iter_weighted_edges())
        assert len(topological_sort(g)) == 25

    def test_grid(self):
        """A 3x3 grid has 12 undirected neighbor pairs, both ways."""
        g = grid_graph(9, seed=0)
        assert g.edge_count == 24

    def test_invalid_arguments(self):
        """Bad sizes and weight ranges are rejected."""
        with pytest.raises(InputError):
            random_graph(0)
        with pytest.raises(InputError):
            random_graph(5, -1)
        with pytest.raises(InputError):
            random_graph(5, 10, w_min=5, w_max=1)
        with pytest.raises(InputError):
            random_dag(3, weight_dist="exp")
