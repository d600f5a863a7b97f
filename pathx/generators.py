"""Seeded random graph factories for tests and experiments.

Supported families:

* ``random_graph``: directed graph with uniformly sampled edges.
* ``random_dag``: edges only go from lower to higher vertex ids.
* ``grid_graph``: 2D grid with edges between neighbors in both directions.

By default a backbone chain ``i -> i+1`` is added first so the graph is
weakly connected and every vertex is reachable from ``0``.
"""

from __future__ import annotations

import math
import random
from typing import Literal, Optional, Set, Tuple

from .exceptions import InputError
from .graph import Graph

WeightDist = Literal["uniform", "small_int"]


def _sample_weight(rng: random.Random, dist: WeightDist, w_min: int, w_max: int) -> int:
    if w_max < w_min:
        raise InputError("w_max must be >= w_min.")
    if dist == "uniform":
        return rng.randint(w_min, w_max)
    if dist == "small_int":
        # Many equal weights, lots of ties in the frontier
        return rng.randint(w_min, min(w_max, w_min + 3))
    raise InputError(f"unknown weight distribution: {dist}")


class _EdgeSampler:
    def __init__(self, n: int, rng: random.Random, dist: WeightDist, w_min: int, w_max: int) -> None:
        self.graph = Graph()
        self.graph.add_vertices(range(n))
        self.rng = rng
        self.dist = dist
        self.w_min = w_min
        self.w_max = w_max
        self.seen: Set[Tuple[int, int]] = set()

    def add(self, u: int, v: int) -> None:
        if u == v or (u, v) in self.seen:
            return
        self.seen.add((u, v))
        self.graph.add_edge(u, v, _sample_weight(self.rng, self.dist, self.w_min, self.w_max))


def random_graph(
    n: int,
    m: Optional[int] = None,
    seed: Optional[int] = 0,
    w_min: int = 1,
    w_max: int = 100,
    weight_dist: WeightDist = "uniform",
    connected: bool = True,
) -> Graph:
    """Generate a random directed graph on vertices ``0 .. n-1``.

    Args:
        n: Number of vertices.
        m: Target number of edges (default ``4n``, capped at ``n(n-1)``).
        seed: Seed of the :class:`random.Random` instance.
        w_min: Smallest edge weight.
        w_max: Largest edge weight.
        weight_dist: ``"uniform"`` or ``"small_int"``.
        connected: Add the ``i -> i+1`` backbone first.

    Returns:
        A :class:`~pathx.graph.Graph` without self-loops or parallel edges.
    """
    if n <= 0:
        raise InputError("n must be > 0.")
    if m is None:
        m = n * 4
    if m < 0:
        raise InputError("m must be >= 0.")
    rng = random.Random(seed)
    sampler = _EdgeSampler(n, rng, weight_dist, w_min, w_max)
    if connected:
        for i in range(n - 1):
            sampler.add(i, i + 1)
    target = min(m, n * (n - 1))
    while len(sampler.seen) < target:
        sampler.add(rng.randrange(n), rng.randrange(n))
    return sampler.graph


def random_dag(
    n: int,
    m: Optional[int] = None,
    seed: Optional[int] = 0,
    w_min: int = 1,
    w_max: int = 100,
    weight_dist: WeightDist = "uniform",
    connected: bool = True,
) -> Graph:
    """Generate a random DAG whose edges go from lower to higher ids.

    Negative ``w_min`` is allowed; DAG algorithms and Bellman-Ford handle
    negative weights on acyclic graphs.
    """
    if n <= 0:
        raise InputError("n must be > 0.")
    if m is None:
        m = n * 2
    if m < 0:
        raise InputError("m must be >= 0.")
    rng = random.Random(seed)
    sampler = _EdgeSampler(n, rng, weight_dist, w_min, w_max)
    if connected:
        for i in range(n - 1):
            sampler.add(i, i + 1)
    target = min(m, n * (n - 1) // 2)
    while len(sampler.seen) < target:
        u, v = rng.randrange(n), rng.randrange(n)
        if u > v:
            u, v = v, u
        sampler.add(u, v)
    return sampler.graph


def grid_graph(
    n: int,
    seed: Optional[int] = 0,
    w_min: int = 1,
    w_max: int = 100,
    weight_dist: WeightDist = "uniform",
) -> Graph:
    """Generate a near-square grid on the first ``n`` cells in row-major order."""
    if n <= 0:
        raise InputError("n must be > 0.")
    rows = max(1, math.isqrt(n))
    cols = max(1, (n + rows - 1) // rows)
    sampler = _EdgeSampler(n, random.Random(seed), weight_dist, w_min, w_max)
    for r in range(rows):
        for c in range(cols):
            u = r * cols + c
            if u >= n:
                continue
            right, down = u + 1, u + cols
            if c + 1 < cols and right < n:
                sampler.add(u, right)
                sampler.add(right, u)
            if down < n:
                sampler.add(u, down)
                sampler.add(down, u)
    return sampler.graph


__all__ = ["WeightDist", "grid_graph", "random_dag", "random_graph"]
