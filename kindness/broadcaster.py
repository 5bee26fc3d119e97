"""
broadcaster.py - Minimal Event Fan-Out

Process-wide publish/subscribe channel for ledger state changes.

- Handlers are plain callables taking a single Event
- Delivery is synchronous, in subscription order
- A handler that raises is dropped and never invoked again
- A handler's failure never reaches the publisher or other handlers

Handlers must return quickly: publish runs inside the ledger's write path.
"""

from __future__ import annotations
from datetime import datetime
from itertools import count
from typing import Any, Callable, Dict
import threading

from .core import Event


# Handler type: (event) -> None
EventHandler = Callable[[Event], None]


class EventBroadcaster:
    """
    Observer registry with defined delivery order and failure isolation.

    Thread Safety:
        subscribe, unsubscribe and publish may be called concurrently.
        publish delivers to a snapshot of the subscribers taken when it starts,
        so a handler added mid-publish does not see the in-flight event.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._lock = threading.Lock()
        # Insertion-ordered: token -> handler
        self._subscribers: Dict[int, EventHandler] = {}
        self._tokens = count()
        self._sequence = count()

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """
        Register a handler for every subsequently published event.

        Returns:
            A zero-argument function that deregisters the handler. Calling it
            more than once is harmless.
        """
        if not callable(handler):
            raise TypeError(f"Event handler must be callable, got {type(handler)}")
        with self._lock:
            token = next(self._tokens)
            self._subscribers[token] = handler

        def unsubscribe() -> None:
            self._remove(token)

        return unsubscribe

    def _remove(self, token: int) -> bool:
        with self._lock:
            return self._subscribers.pop(token, None) is not None

    def _is_subscribed(self, token: int) -> bool:
        with self._lock:
            return token in self._subscribers

    def publish(self, kind: str, payload: Any, published_at: datetime) -> Event:
        """
        Deliver an event to every current subscriber.

        Args:
            kind: Event kind string
            payload: Event payload (Participant or FeedEntry)
            published_at: Time of the triggering mutation

        Returns:
            The Event that was delivered
        """
        with self._lock:
            event = Event(
                kind=kind,
                payload=payload,
                published_at=published_at,
                sequence=next(self._sequence),
            )
            snapshot = list(self._subscribers.items())

        for token, handler in snapshot:
            # Skip handlers removed since the snapshot was taken
            if not self._is_subscribed(token):
                continue
            try:
                handler(event)
            except Exception as exc:
                if self._remove(token) and self.verbose:
                    print(f"✗ DROPPED subscriber {getattr(handler, '__name__', handler)!s}: {exc!r}")
        return event

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def clear(self) -> None:
        """Remove all subscribers (for testing/reset)."""
        with self._lock:
            self._subscribers.clear()
