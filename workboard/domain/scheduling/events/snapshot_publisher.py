"""
Snapshot publisher for board collections.

A synchronous observer list that always holds the latest published
collection. New subscribers receive that snapshot immediately, then every
later publication in order. A subscriber that raises is logged and skipped so
the remaining subscribers still see the update.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from workboard.core.observability import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Subscriber = Callable[[tuple[T, ...]], None]


class SnapshotPublisher(Generic[T]):
    """Holds the current collection and notifies subscribers of replacements."""

    def __init__(self, name: str, initial: tuple[T, ...] = ()) -> None:
        self._name = name
        self._current: tuple[T, ...] = tuple(initial)
        self._subscribers: list[Subscriber] = []

    @property
    def current(self) -> tuple[T, ...]:
        return self._current

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """
        Register a subscriber and deliver the current snapshot to it.

        Returns:
            A callable that removes the subscription; calling it twice is harmless
        """
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)
        self._deliver(subscriber, self._current)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, snapshot: tuple[T, ...]) -> None:
        """Replace the current collection and notify every subscriber."""
        self._current = tuple(snapshot)
        for subscriber in list(self._subscribers):
            self._deliver(subscriber, self._current)

    def _deliver(self, subscriber: Subscriber, snapshot: tuple[T, ...]) -> None:
        try:
            subscriber(snapshot)
        except Exception as e:
            logger.error(
                "snapshot_subscriber_failed",
                collection=self._name,
                subscriber=repr(subscriber),
                error=str(e),
            )
