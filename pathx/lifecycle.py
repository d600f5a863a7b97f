"""Cancellable computation lifecycle shared by every algorithm.

:class:`Lifecycle` owns the state machine::

    NOT_RUNNING/FINISHED/ABORTED --compute--> RUNNING
    RUNNING --normal end--> FINISHED
    RUNNING --abort--> PENDING_ABORTION --safe point--> ABORTED
    RUNNING --error--> ABORTED (error re-raised)

:class:`AlgorithmBase` is the shallow base class the algorithms derive from.
It holds the graph, configuration, relaxer, logger, counters and a
:class:`Lifecycle`, and forwards the lifecycle events.
"""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .config import DEFAULT_CONFIG, AlgorithmConfig
from .events import Event
from .exceptions import AlgorithmError, ComputationCancelled, InputError
from .graph import GraphProtocol
from .logger import Logger, bind
from .metrics import AlgorithmMetrics, new_counters
from .relaxers import DistanceRelaxer, get_relaxer


class ComputationState(Enum):
    """State of an algorithm instance."""

    NOT_RUNNING = "not_running"
    RUNNING = "running"
    PENDING_ABORTION = "pending_abortion"
    FINISHED = "finished"
    ABORTED = "aborted"


class CancellationToken:
    """Thread-safe cancellation flag polled by algorithm bodies."""

    def __init__(self) -> None:
        self._flag = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._flag.is_set()

    def cancel(self) -> None:
        self._flag.set()

    def reset(self) -> None:
        self._flag.clear()

    def raise_if_cancelled(self) -> None:
        """Raise :class:`ComputationCancelled` if cancellation was requested."""
        if self._flag.is_set():
            raise ComputationCancelled()


class Lifecycle:
    """State machine wrapping ``initialize``, body and ``clean`` of a run."""

    def __init__(self, name: str, logger: Optional[Logger] = None) -> None:
        """Initialize the lifecycle.

        Args:
            name: Algorithm name used in log events.
            logger: Destination of ``compute.*`` events.
        """
        self.name = name
        self.logger = bind(logger, algorithm=name)
        self.token = CancellationToken()
        self.last_wall_ms: Optional[float] = None
        self._lock = threading.RLock()
        self._state = ComputationState.NOT_RUNNING

        self.started = Event("started")
        self.finished = Event("finished")
        self.aborted = Event("aborted")
        self.state_changed = Event("state_changed")

    @property
    def state(self) -> ComputationState:
        with self._lock:
            return self._state

    def run(
        self,
        initialize: Callable[[], None],
        body: Callable[[CancellationToken], None],
        clean: Callable[[], None],
        describe: Optional[Callable[[], Dict[str, Any]]] = None,
    ) -> None:
        """Run one computation.

        ``clean`` runs on every exit path once the ``started`` notifications
        have been delivered, including a failing ``initialize``.
        Cancellation ends the run quietly in ``ABORTED``; any other exception
        moves the state to ``ABORTED`` and propagates.

        Args:
            initialize: Allocates per-run state.
            body: The algorithm proper; receives the cancellation token.
            clean: Post-processing hook.
            describe: Returns extra fields for the ``compute.finished`` and
                ``compute.aborted`` log events.

        Raises:
            AlgorithmError: If a computation is already in progress.
        """
        with self._lock:
            if self._state in (ComputationState.RUNNING, ComputationState.PENDING_ABORTION):
                raise AlgorithmError(f"{self.name}: computation already in progress")
            self.token.reset()
            self._state = ComputationState.RUNNING
        t0 = time.perf_counter()
        try:
            self.started.fire()
            self.state_changed.fire(ComputationState.RUNNING)
            self.logger.info("compute.started")
            try:
                initialize()
                body(self.token)
            finally:
                clean()
        except ComputationCancelled:
            pass
        except BaseException as exc:
            self._end(t0, describe, error=exc)
            raise
        self._end(t0, describe)

    def _end(
        self,
        t0: float,
        describe: Optional[Callable[[], Dict[str, Any]]],
        error: Optional[BaseException] = None,
    ) -> None:
        with self._lock:
            if error is not None or self._state is ComputationState.PENDING_ABORTION:
                self._state = ComputationState.ABORTED
            else:
                self._state = ComputationState.FINISHED
            state = self._state
        self.last_wall_ms = (time.perf_counter() - t0) * 1000.0

        fields = describe() if describe is not None else {}
        if error is not None:
            fields["error"] = type(error).__name__
        if state is ComputationState.ABORTED:
            self.logger.info("compute.aborted", wall_ms=self.last_wall_ms, **fields)
            self.aborted.fire()
        else:
            self.logger.info("compute.finished", wall_ms=self.last_wall_ms, **fields)
            self.finished.fire()
        self.state_changed.fire(state)

    def abort(self) -> None:
        """Request cancellation of the running computation.

        Safe to call from any thread. Does nothing unless the state is
        ``RUNNING``.
        """
        raise_event = False
        with self._lock:
            if self._state is ComputationState.RUNNING:
                self._state = ComputationState.PENDING_ABORTION
                self.token.cancel()
                raise_event = True
        if raise_event:
            self.state_changed.fire(ComputationState.PENDING_ABORTION)


class AlgorithmBase:
    """Base class of the path algorithms.

    Subclasses implement :meth:`_initialize`, :meth:`_compute` and optionally
    :meth:`_clean`; :meth:`compute` wraps them in the lifecycle.
    """

    name = "algorithm"
    extra_counters: Tuple[str, ...] = ()

    def __init__(
        self,
        graph: GraphProtocol,
        distance_relaxer: Optional[DistanceRelaxer] = None,
        config: Optional[AlgorithmConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialize shared algorithm state.

        Args:
            graph: Read-only graph capability.
            distance_relaxer: Relaxer to use; ``config.relaxer`` when ``None``.
            config: Algorithm configuration.
            logger: Optional logger; defaults to :class:`NoopLogger`.

        Raises:
            InputError: If ``graph`` is missing or the relaxer has the wrong type.
        """
        if graph is None:
            raise InputError("graph must not be None.")
        self.graph = graph
        self.config = config or DEFAULT_CONFIG
        if distance_relaxer is None:
            distance_relaxer = get_relaxer(self.config.relaxer)
        elif not isinstance(distance_relaxer, DistanceRelaxer):
            raise InputError("distance_relaxer must be a DistanceRelaxer.")
        self.distance_relaxer = distance_relaxer
        self.logger: Logger = bind(logger, algorithm=self.name)
        self.counters: Dict[str, int] = new_counters(self.extra_counters)

        self._lifecycle = Lifecycle(self.name, self.logger)
        self.started = self._lifecycle.started
        self.finished = self._lifecycle.finished
        self.aborted = self._lifecycle.aborted
        self.state_changed = self._lifecycle.state_changed

    # ---- lifecycle ----------------------------------------------------

    @property
    def state(self) -> ComputationState:
        """Current :class:`ComputationState`."""
        return self._lifecycle.state

    @property
    def last_wall_ms(self) -> Optional[float]:
        """Duration of the last computation, ``None`` before the first one."""
        return self._lifecycle.last_wall_ms

    def compute(self) -> None:
        """Run the algorithm.

        Returns normally when aborted; check :attr:`state` afterwards.
        """
        self._lifecycle.run(self._begin, self._compute, self._clean, self.summary)

    def abort(self) -> None:
        """Request cooperative cancellation; thread-safe."""
        self._lifecycle.abort()

    def _begin(self) -> None:
        self.counters = new_counters(self.extra_counters)
        self._initialize()

    def _initialize(self) -> None:
        """Allocate per-run state."""

    def _compute(self, token: CancellationToken) -> None:
        raise NotImplementedError

    def _clean(self) -> None:
        """Post-process after the body, on every exit path."""

    # ---- counters -----------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of the counters of the last computation."""
        return dict(self.counters)

    def metrics(self, wall_ms: Optional[float] = None) -> AlgorithmMetrics:
        """Return an :class:`AlgorithmMetrics` record for the last computation.

        Args:
            wall_ms: Duration to report; defaults to :attr:`last_wall_ms`.
        """
        return AlgorithmMetrics(
            algorithm=self.name,
            n=self.graph.vertex_count,
            m=self.graph.edge_count,
            relaxer=self.distance_relaxer.name,
            state=self.state.value,
            counters=self.summary(),
            wall_ms=self.last_wall_ms if wall_ms is None else wall_ms,
        )


__all__ = ["AlgorithmBase", "CancellationToken", "ComputationState", "Lifecycle"]
