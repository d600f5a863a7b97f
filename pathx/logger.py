"""Structured event logging for algorithm runs.

Algorithms emit dotted event names (``compute.started``,
``bellman_ford.negative_cycle``) with keyword fields. Nothing is written
unless a logger is passed in; :func:`bind` attaches fields such as the
algorithm name to every event.
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Dict, Protocol


class Logger(Protocol):
    """Protocol for the loggers algorithms accept."""

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO``-level event."""
        ...

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG``-level event."""
        ...

    def warning(self, event: str, **fields: Any) -> None:
        """Emit a ``WARNING``-level event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


class StdLogger:
    """Writes one line per event to a stream, as ``level event k=v`` or JSON.

    Args:
        level: Minimum level emitted: ``"debug"``, ``"info"`` or ``"warning"``.
        json_fmt: Write a JSON object per event.
        stream: Output stream; ``sys.stderr`` when omitted.
        timestamps: Add a ``ts`` field (seconds since the epoch).
    """

    _levels: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: Any | None = None,
        timestamps: bool = False,
    ) -> None:
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr
        self.timestamps = timestamps

    def enabled(self, level: str) -> bool:
        """Return whether events at ``level`` are written."""
        return self._levels[level] >= self._levels.get(self.level, 20)

    def log(self, level: str, event: str, **fields: Any) -> None:
        if not self.enabled(level):
            return
        if self.timestamps:
            fields = {"ts": round(time.time(), 3), **fields}
        if self.json_fmt:
            record = {"level": level, "event": event, **fields}
            line = json.dumps(record, default=str)
        else:
            pairs = " ".join(f"{k}={v}" for k, v in fields.items())
            line = f"{level} {event} {pairs}".rstrip()
        self.stream.write(line + "\n")

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)


class BoundLogger:
    """Wraps a logger and prepends fixed ``context`` fields to every event."""

    def __init__(self, inner: Logger, **context: Any) -> None:
        self.inner = inner
        self.context = context

    def info(self, event: str, **fields: Any) -> None:
        self.inner.info(event, **{**self.context, **fields})

    def debug(self, event: str, **fields: Any) -> None:
        self.inner.debug(event, **{**self.context, **fields})

    def warning(self, event: str, **fields: Any) -> None:
        self.inner.warning(event, **{**self.context, **fields})


def bind(logger: Logger | None, **context: Any) -> Logger:
    """Return ``logger`` with ``context`` added to every event.

    A ``None`` logger gives a :class:`NoopLogger`; binding a
    :class:`BoundLogger` again merges the contexts.
    """
    if logger is None or isinstance(logger, NoopLogger):
        return NoopLogger()
    if isinstance(logger, BoundLogger):
        return BoundLogger(logger.inner, **{**logger.context, **context})
    return BoundLogger(logger, **context)


__all__ = ["BoundLogger", "Logger", "NoopLogger", "StdLogger", "bind"]
