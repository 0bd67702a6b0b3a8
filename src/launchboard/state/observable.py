"""Minimal publish/subscribe value holder, one per published state field."""

import threading
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Callback = Callable[[T], None]


class Subscription:
    """Handle returned by Observable.subscribe; cancel() stops delivery."""

    def __init__(self, observable: "Observable", callback: Callback):
        self._observable = observable
        self._callback = callback
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._observable._remove(self)
            self.active = False


class Observable(Generic[T]):
    """
    Holds the current value of a field and notifies subscribers on every publish.

    Publishing the same value twice notifies twice; every transition is an
    emission. Subscriber exceptions propagate to the publisher.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: List[Subscription] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    def publish(self, value: T) -> None:
        with self._lock:
            self._value = value
            subscribers = list(self._subscribers)
        for subscription in subscribers:
            subscription._callback(value)

    def subscribe(self, callback: Callback, *, replay: bool = True) -> Subscription:
        """
        Register a callback for future values.

        Args:
            callback: Called with each published value
            replay: Also call it immediately with the current value

        Returns:
            Subscription whose cancel() unregisters the callback
        """
        subscription = Subscription(self, callback)
        with self._lock:
            self._subscribers.append(subscription)
            current = self._value
        if replay:
            callback(current)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscribers.remove(subscription)
