"""Pytest configuration and shared graph fixtures for pathx tests."""

import os

import numpy as np
import pytest

from pathx import Graph


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture
def scenario_a() -> Graph:
    """A->B(30), A->C(30), B->E(60), C->D(40), D->E(4)."""
    return Graph.from_edges(
        [
            ("A", "B", 30),
            ("A", "C", 30),
            ("B", "E", 60),
            ("C", "D", 40),
            ("D", "E", 4),
        ]
    )


@pytest.fixture
def scenario_b() -> Graph:
    """Five-vertex graph with a self-loop and several cycles."""
    return Graph.from_edges(
        [
            ("A", "C", 1),
            ("B", "B", 2),
            ("B", "D", 1),
            ("B", "E", 2),
            ("C", "B", 7),
            ("C", "D", 3),
            ("D", "E", 1),
            ("E", "A", 1),
            ("E", "B", 1),
        ]
    )


@pytest.fixture
def negative_cycle() -> Graph:
    """Four-vertex cycle with total weight -1, entered from S."""
    return Graph.from_edges(
        [
            ("S", "A", 1),
            ("A", "B", 2),
            ("B", "C", -4),
            ("C", "D", 1),
            ("D", "A", 0),
        ]
    )


@pytest.fixture
def negative_edge() -> Graph:
    """Acyclic graph with one negative edge; shortest A->C goes through it."""
    return Graph.from_edges(
        [
            ("A", "B", 4),
            ("A", "C", 2),
            ("B", "C", -3),
            ("C", "D", 1),
        ]
    )


@pytest.fixture
def project_dag() -> Graph:
    """Small task network used for critical path checks."""
    return Graph.from_edges(
        [
            ("start", "design", 3),
            ("start", "procure", 5),
            ("design", "build", 4),
            ("procure", "build", 1),
            ("build", "test", 2),
            ("design", "test", 1),
            ("test", "end", 1),
        ]
    )


@pytest.fixture
def random_weighted(rng: np.random.Generator) -> Graph:
    """Random directed multigraph on ``0..29`` with integer weights in [0, 20]."""
    n, m = 30, 120
    g = Graph()
    g.add_vertices(range(n))
    for _ in range(m):
        u, v = (int(x) for x in rng.integers(0, n, size=2))
        g.add_edge(u, v, int(rng.integers(0, 21)))
    return g
