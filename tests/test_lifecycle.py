"""Tests for the computation lifecycle, cancellation and instrumentation."""

import io
import json
import threading

import pytest

from pathx import (
    AlgorithmBase,
    AlgorithmError,
    BellmanFordShortestPath,
    BoundLogger,
    CancellationToken,
    ComputationState,
    DijkstraShortestPath,
    Graph,
    NegativeWeightError,
    NoopLogger,
    StdLogger,
)
from pathx.exceptions import ComputationCancelled
from pathx.generators import random_graph
from pathx.lifecycle import Lifecycle
from pathx.logger import bind


class _Recorder(AlgorithmBase):
    """Minimal algorithm recording which hooks ran."""

    name = "recorder"

    def __init__(self, graph, body=None, **kwargs):
        super().__init__(graph, **kwargs)
        self.calls = []
        self.body = body

    def _initialize(self):
        self.calls.append("initialize")

    def _compute(self, token):
        self.calls.append("compute")
        if self.body is not None:
            self.body(self, token)

    def _clean(self):
        self.calls.append("clean")


def _states(algo):
    seen = []
    algo.state_changed.subscribe(seen.append)
    return seen


class TestCancellationToken:
    """Tests for CancellationToken."""

    def test_cancel_and_reset(self):
        """The token raises only while cancelled."""
        token = CancellationToken()
        token.raise_if_cancelled()
        token.cancel()
        assert token.is_cancelled
        with pytest.raises(ComputationCancelled):
            token.raise_if_cancelled()
        token.reset()
        assert not token.is_cancelled


class TestLifecycle:
    """Tests for the state machine."""

    def test_initial_state(self):
        """A fresh algorithm is not running and has no timing."""
        algo = _Recorder(Graph())
        assert algo.state is ComputationState.NOT_RUNNING
        assert algo.last_wall_ms is None

    def test_normal_run(self):
        """A normal run goes RUNNING -> FINISHED and fires its events."""
        algo = _Recorder(Graph())
        events = []
        algo.started.subscribe(lambda: events.append("started"))
        algo.finished.subscribe(lambda: events.append("finished"))
        algo.aborted.subscribe(lambda: events.append("aborted"))
        states = _states(algo)

        algo.compute()

        assert algo.calls == ["initialize", "compute", "clean"]
        assert events == ["started", "finished"]
        assert states == [ComputationState.RUNNING, ComputationState.FINISHED]
        assert algo.state is ComputationState.FINISHED
        assert algo.last_wall_ms is not None and algo.last_wall_ms >= 0.0

    def test_rerun_after_finish(self):
        """A finished algorithm can be computed again."""
        algo = _Recorder(Graph())
        algo.compute()
        algo.compute()
        assert algo.calls == ["initialize", "compute", "clean"] * 2
        assert algo.state is ComputationState.FINISHED

    def test_abort_inside_body(self):
        """Abort takes effect at the next safe point and compute returns."""

        def body(algo, token):
            algo.abort()
            assert algo.state is ComputationState.PENDING_ABORTION
            token.raise_if_cancelled()
            algo.calls.append("unreachable")

        algo = _Recorder(Graph(), body=body)
        aborted = []
        algo.aborted.subscribe(lambda: aborted.append(True))
        states = _states(algo)

        algo.compute()

        assert algo.state is ComputationState.ABORTED
        assert aborted == [True]
        assert "unreachable" not in algo.calls
        assert algo.calls[-1] == "clean"
        assert states == [
            ComputationState.RUNNING,
            ComputationState.PENDING_ABORTION,
            ComputationState.ABORTED,
        ]

    def test_abort_without_safe_point_still_aborts(self):
        """A pending abort ends in ABORTED even if no safe point was hit."""
        algo = _Recorder(Graph(), body=lambda a, t: a.abort())
        algo.compute()
        assert algo.state is ComputationState.ABORTED

    def test_abort_when_idle_is_noop(self):
        """Abort outside a computation changes nothing."""
        algo = _Recorder(Graph())
        states = _states(algo)
        algo.abort()
        assert algo.state is ComputationState.NOT_RUNNING
        assert states == []

    def test_new_run_resets_cancellation(self):
        """A run after an aborted one is not cancelled from the start."""
        algo = _Recorder(Graph(), body=lambda a, t: a.abort())
        algo.compute()
        algo.body = lambda a, t: t.raise_if_cancelled()
        algo.compute()
        assert algo.state is ComputationState.FINISHED

    def test_reentrant_compute_fails_fast(self):
        """Calling compute while running raises AlgorithmError."""
        algo = _Recorder(Graph(), body=lambda a, t: a.compute())
        with pytest.raises(AlgorithmError, match="already in progress"):
            algo.compute()
        assert algo.state is ComputationState.ABORTED

    def test_error_aborts_and_propagates(self):
        """A body error leaves the state ABORTED, runs clean and is re-raised."""

        def body(algo, token):
            raise ValueError("bad input")

        algo = _Recorder(Graph(), body=body)
        aborted = []
        algo.aborted.subscribe(lambda: aborted.append(True))

        with pytest.raises(ValueError, match="bad input"):
            algo.compute()

        assert algo.state is ComputationState.ABORTED
        assert aborted == [True]
        assert algo.calls == ["initialize", "compute", "clean"]

    def test_raising_started_handler_does_not_wedge(self, scenario_a):
        """A failing started handler aborts the run and the next run still works."""

        def boom():
            raise RuntimeError("handler failed")

        algo = DijkstraShortestPath(scenario_a, scenario_a.weight)
        sub = algo.started.subscribe(boom)
        with pytest.raises(RuntimeError, match="handler failed"):
            algo.compute("A")
        assert algo.state is ComputationState.ABORTED

        sub.release()
        algo.compute("A")
        assert algo.state is ComputationState.FINISHED
        assert algo.get_distance("E") == 74

    def test_raising_state_changed_handler_does_not_wedge(self):
        """A handler failing on RUNNING leaves the state ABORTED."""
        algo = _Recorder(Graph())

        def on_state(state):
            if state is ComputationState.RUNNING:
                raise RuntimeError("observer failed")

        with algo.state_changed.subscribe(on_state):
            with pytest.raises(RuntimeError):
                algo.compute()
        assert algo.state is ComputationState.ABORTED
        algo.compute()
        assert algo.state is ComputationState.FINISHED

    def test_clean_runs_when_initialize_fails(self):
        """clean still runs when initialize raises."""

        class FailingInit(_Recorder):
            def _initialize(self):
                super()._initialize()
                raise ValueError("no memory")

        algo = FailingInit(Graph())
        with pytest.raises(ValueError):
            algo.compute()
        assert algo.calls == ["initialize", "clean"]
        assert algo.state is ComputationState.ABORTED

    def test_lifecycle_run_directly(self):
        """Lifecycle.run can drive plain callables."""
        lc = Lifecycle("plain")
        calls = []
        lc.run(lambda: calls.append("i"), lambda t: calls.append("b"), lambda: calls.append("c"))
        assert calls == ["i", "b", "c"]
        assert lc.state is ComputationState.FINISHED


class TestCancellationFromThread:
    """Cooperative cancellation triggered from another thread."""

    def test_abort_from_second_thread(self):
        """Aborting from a watchdog thread ends the run in ABORTED."""
        g = random_graph(200, 800, seed=1)
        algo = DijkstraShortestPath(g, g.weight)
        in_body = threading.Event()
        abort_sent = threading.Event()

        def on_examine(v):
            if not in_body.is_set():
                in_body.set()
                abort_sent.wait(5)

        def watchdog():
            in_body.wait(5)
            algo.abort()
            abort_sent.set()

        algo.examine_vertex.subscribe(on_examine)
        t = threading.Thread(target=watchdog)
        t.start()
        algo.compute(0)
        t.join(5)

        assert algo.state is ComputationState.ABORTED
        assert algo.summary()["vertices_examined"] == 1


class TestInstrumentation:
    """Counters, metrics and logging."""

    def test_counters_reset_each_run(self, scenario_a):
        """Counters describe only the last computation."""
        algo = DijkstraShortestPath(scenario_a, scenario_a.weight)
        algo.compute("A")
        first = algo.summary()
        algo.compute("A")
        assert algo.summary() == first
        assert first["vertices_examined"] == 5
        assert first["edges_examined"] == 5
        assert first["edges_relaxed"] == 5

    def test_summary_is_a_copy(self, scenario_a):
        """Mutating the summary does not touch the counters."""
        algo = DijkstraShortestPath(scenario_a, scenario_a.weight)
        algo.compute("A")
        s = algo.summary()
        s["edges_relaxed"] = -1
        assert algo.counters["edges_relaxed"] == 5

    def test_metrics(self, scenario_a):
        """metrics() reports graph size, relaxer, state and counters."""
        algo = DijkstraShortestPath(scenario_a, scenario_a.weight)
        algo.compute("A")
        m = algo.metrics()
        assert m.algorithm == "dijkstra"
        assert (m.n, m.m) == (5, 5)
        assert m.relaxer == "shortest"
        assert m.state == "finished"
        assert m.counters == algo.summary()
        assert m.wall_ms == algo.last_wall_ms
        assert algo.metrics(wall_ms=1.5).to_dict()["wall_ms"] == 1.5

    def test_logger_receives_lifecycle_events(self, scenario_a):
        """StdLogger sees compute.started and compute.finished."""
        buf = io.StringIO()
        algo = DijkstraShortestPath(
            scenario_a, scenario_a.weight, logger=StdLogger(level="info", json_fmt=True, stream=buf)
        )
        algo.compute("A")
        records = [json.loads(line) for line in buf.getvalue().splitlines()]
        assert [r["event"] for r in records] == ["compute.started", "compute.finished"]
        assert records[1]["algorithm"] == "dijkstra"
        assert records[1]["edges_relaxed"] == 5

    def test_logger_reports_errors(self):
        """A failing run logs compute.aborted with the error type."""
        g = Graph.from_edges([("A", "B", -1)])
        buf = io.StringIO()
        algo = DijkstraShortestPath(g, g.weight, logger=StdLogger(level="info", stream=buf))
        with pytest.raises(NegativeWeightError):
            algo.compute("A")
        out = buf.getvalue()
        assert "info compute.aborted" in out
        assert "error=NegativeWeightError" in out

    def test_logger_level_filters(self, scenario_a):
        """Events below the logger level are not written."""
        buf = io.StringIO()
        algo = DijkstraShortestPath(scenario_a, scenario_a.weight, logger=StdLogger(stream=buf))
        algo.compute("A")
        assert buf.getvalue() == ""

    def test_negative_cycle_is_a_warning(self, negative_cycle):
        """Bellman-Ford reports a negative cycle at the default warning level."""
        buf = io.StringIO()
        algo = BellmanFordShortestPath(negative_cycle, negative_cycle.weight, logger=StdLogger(stream=buf))
        algo.compute("S")
        assert buf.getvalue().startswith("warning bellman_ford.negative_cycle algorithm=bellman_ford edge=")

    def test_timestamps(self):
        """timestamps=True adds a ts field before the event fields."""
        buf = io.StringIO()
        StdLogger(level="debug", json_fmt=True, stream=buf, timestamps=True).debug("x", k=1)
        record = json.loads(buf.getvalue())
        assert list(record) == ["level", "event", "ts", "k"]


class TestBind:
    """Tests for bind and BoundLogger."""

    def test_context_is_merged(self):
        """Bound fields come first and call fields override them."""
        buf = io.StringIO()
        log = bind(bind(StdLogger(level="info", stream=buf), run=1), algorithm="dag")
        assert isinstance(log, BoundLogger)
        log.info("e", run=2, k="v")
        assert buf.getvalue() == "info e run=2 algorithm=dag k=v\n"

    def test_none_binds_to_noop(self):
        """Binding None gives a NoopLogger."""
        assert isinstance(bind(None, algorithm="x"), NoopLogger)
