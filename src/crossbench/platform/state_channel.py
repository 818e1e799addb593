"""Multi-subscriber state channel with last-value-wins semantics."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[T], None]


class StateChannel(Generic[T]):
    """Holds the latest published value and broadcasts changes to subscribers.

    New subscribers are called immediately with the current value; values
    published before they subscribed are not replayed. Callbacks run on the
    publishing thread after the channel lock is released, so a callback may
    freely read other locked state. A failing callback is logged and does not
    affect the publisher or the other subscribers.

    The channel does not order concurrent publishers against each other;
    callers that need deliveries in transition order serialize their
    publishes (see ``BenchmarkOrchestrator``).

    Example:
        >>> channel = StateChannel(IDLE)
        >>> unsubscribe = channel.subscribe(print)  # prints Idle() right away
        >>> channel.publish(Computing(256))         # prints Computing(size=256)
        >>> unsubscribe()
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Subscriber[T]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    def publish(self, value: T) -> None:
        with self._lock:
            self._value = value
            subscribers = list(self._subscribers)
        for callback in subscribers:
            self._notify(callback, value)

    def subscribe(self, callback: Subscriber[T]) -> Callable[[], None]:
        """Register ``callback`` and call it with the current value.

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)
            current = self._value
        self._notify(callback, current)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    @staticmethod
    def _notify(callback: Subscriber[T], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception(f"State subscriber {callback!r} failed on {value!r}")
