"""Subscription-based notifications used by algorithms and observers.

An :class:`Event` holds an ordered list of handlers. Subscribing returns a
:class:`Subscription` handle; releasing it (explicitly or by leaving a
``with`` block) unsubscribes exactly that handler, so a recorder can be
attached for the duration of one computation and is detached on every exit
path, including errors and cancellation.
"""

from __future__ import annotations

import itertools
from types import TracebackType
from typing import Any, Callable, Dict, Iterable, List, Optional

Handler = Callable[..., Any]

_ids = itertools.count(1)


class Subscription:
    """Handle returned by :meth:`Event.subscribe`; releasing it unsubscribes."""

    def __init__(self, event: "Event", token: int) -> None:
        self._event: Optional[Event] = event
        self._token = token

    @property
    def active(self) -> bool:
        """``True`` until the subscription has been released."""
        return self._event is not None

    def release(self) -> None:
        """Unsubscribe the handler. Releasing twice is a no-op."""
        event, self._event = self._event, None
        if event is not None:
            event._remove(self._token)

    close = release

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release()


class CompositeSubscription(Subscription):
    """Several subscriptions released together, in reverse order."""

    def __init__(self, subscriptions: Iterable[Subscription] = ()) -> None:
        self._children: List[Subscription] = list(subscriptions)
        self._released = False

    @property
    def active(self) -> bool:
        return not self._released

    def add(self, subscription: Subscription) -> None:
        """Track one more subscription."""
        self._children.append(subscription)

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        while self._children:
            self._children.pop().release()

    close = release


class Event:
    """Ordered multicast notification.

    Handlers run synchronously in subscription order on the thread that
    fires the event. Handler exceptions propagate to the firing algorithm.
    """

    def __init__(self, name: str = "") -> None:
        """Initialize an event with an optional ``name`` used in ``repr``."""
        self.name = name
        self._handlers: Dict[int, Handler] = {}

    def subscribe(self, handler: Handler) -> Subscription:
        """Register ``handler`` and return its subscription handle."""
        if not callable(handler):
            raise TypeError("handler must be callable")
        token = next(_ids)
        self._handlers[token] = handler
        return Subscription(self, token)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Release ``subscription``; equivalent to ``subscription.release()``."""
        subscription.release()

    def _remove(self, token: int) -> None:
        self._handlers.pop(token, None)

    def fire(self, *args: Any) -> None:
        """Invoke every handler with ``args``."""
        if not self._handlers:
            return
        for handler in list(self._handlers.values()):
            handler(*args)

    __call__ = fire

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        # An event without handlers is still a valid object.
        return True

    def __repr__(self) -> str:
        return f"Event({self.name!r}, handlers={len(self._handlers)})"


__all__ = ["CompositeSubscription", "Event", "Handler", "Subscription"]
