"""Tests for the indexed heap frontier."""

import pytest

from pathx import AlgorithmError, IndexedHeapFrontier
from pathx.relaxers import CRITICAL


def _frontier(keys, compare=None):
    if compare is None:
        return IndexedHeapFrontier(keys.__getitem__)
    return IndexedHeapFrontier(keys.__getitem__, compare)


class TestIndexedHeapFrontier:
    """Tests for IndexedHeapFrontier."""

    def test_dequeues_in_priority_order(self, rng):
        """Vertices come out sorted by priority."""
        keys = {i: float(k) for i, k in enumerate(rng.uniform(0, 100, size=50))}
        f = _frontier(keys)
        for v in keys:
            f.enqueue(v)
        out = [f.dequeue() for _ in range(len(keys))]
        assert [keys[v] for v in out] == sorted(keys.values())
        assert len(f) == 0

    def test_ties_dequeue_in_insertion_order(self):
        """Equal priorities are served first-in first-out."""
        keys = {"a": 1.0, "b": 1.0, "c": 1.0}
        f = _frontier(keys)
        for v in ("b", "a", "c"):
            f.enqueue(v)
        assert [f.dequeue() for _ in range(3)] == ["b", "a", "c"]

    def test_update_decreases_key(self):
        """update() moves a vertex forward after its priority improved."""
        keys = {"a": 5.0, "b": 3.0, "c": 4.0}
        f = _frontier(keys)
        for v in keys:
            f.enqueue(v)
        assert f.peek() == "b"
        keys["a"] = 1.0
        f.update("a")
        assert f.peek() == "a"
        assert [f.dequeue() for _ in range(3)] == ["a", "b", "c"]

    def test_update_increases_key(self):
        """update() also handles a worsened priority."""
        keys = {"a": 1.0, "b": 2.0, "c": 3.0}
        f = _frontier(keys)
        for v in keys:
            f.enqueue(v)
        keys["a"] = 10.0
        f.update("a")
        assert [f.dequeue() for _ in range(3)] == ["b", "c", "a"]

    def test_priorities_are_cached_until_update(self):
        """A changed priority is ignored until update() is called."""
        keys = {"a": 1.0, "b": 2.0}
        f = _frontier(keys)
        f.enqueue("a")
        f.enqueue("b")
        keys["b"] = 0.0
        assert f.peek() == "a"

    def test_descending_comparator(self):
        """With the critical relaxer's ordering the largest comes first."""
        keys = {"a": 1.0, "b": 7.0, "c": 3.0}
        f = _frontier(keys, CRITICAL.compare)
        for v in keys:
            f.enqueue(v)
        assert [f.dequeue() for _ in range(3)] == ["b", "c", "a"]

    def test_membership(self):
        """__contains__ tracks queued vertices."""
        f = _frontier({"a": 1.0})
        assert "a" not in f
        f.enqueue("a")
        assert "a" in f
        assert [] not in f  # unhashable
        f.dequeue()
        assert "a" not in f

    def test_errors(self):
        """Misuse raises the documented errors."""
        f = _frontier({"a": 1.0})
        with pytest.raises(IndexError):
            f.dequeue()
        with pytest.raises(IndexError):
            f.peek()
        with pytest.raises(AlgorithmError):
            f.update("a")
        f.enqueue("a")
        with pytest.raises(AlgorithmError):
            f.enqueue("a")

    def test_interleaved_operations(self, rng):
        """Random enqueue/update/dequeue sequences keep heap order."""
        keys = {}
        f = IndexedHeapFrontier(lambda v: keys[v])
        queued = set()
        popped = []
        for i in range(300):
            op = int(rng.integers(0, 3))
            if op == 0 or not queued:
                keys[i] = float(rng.uniform(0, 100))
                f.enqueue(i)
                queued.add(i)
            elif op == 1:
                v = sorted(queued)[int(rng.integers(0, len(queued)))]
                keys[v] = keys[v] - float(rng.uniform(0, 10))
                f.update(v)
            else:
                v = f.dequeue()
                assert keys[v] == min(keys[u] for u in queued)
                queued.remove(v)
                popped.append(v)
        assert len(f) == len(queued)
