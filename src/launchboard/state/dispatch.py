"""Serialized delivery contexts for state writes.

Network completions arrive on worker threads. Every state write is routed
through a Dispatcher so that writes to view-model state never interleave.
"""

import queue
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from launchboard.utils.logging import get_logger

logger = get_logger(__name__)

Task = Callable[[], None]


class Dispatcher(ABC):
    """A single logical queue that state writes are serialized onto."""

    @abstractmethod
    def submit(self, task: Task) -> None:
        """Schedule task from any thread."""
        pass

    @abstractmethod
    def call(self, task: Task) -> None:
        """Run task now. Callers must already be on the delivery context."""
        pass


class ImmediateDispatcher(Dispatcher):
    """Runs tasks inline on whichever thread submits them, one at a time."""

    def __init__(self):
        self._lock = threading.RLock()

    def submit(self, task: Task) -> None:
        with self._lock:
            task()

    def call(self, task: Task) -> None:
        with self._lock:
            task()


class QueueDispatcher(Dispatcher):
    """
    Queues tasks for the thread that drains it.

    The draining thread (the one calling run_pending or run_until) is the
    single delivery point; tasks never run on the submitting thread.
    """

    def __init__(self):
        self._queue: "queue.Queue[Task]" = queue.Queue()

    def submit(self, task: Task) -> None:
        self._queue.put(task)

    def call(self, task: Task) -> None:
        task()

    def run_pending(self) -> int:
        """Run every task queued so far without blocking. Returns the number run."""
        count = 0
        while True:
            try:
                task = self._queue.get_nowait()
            except queue.Empty:
                return count
            task()
            count += 1

    def run_until(self, predicate: Callable[[], bool], timeout: Optional[float] = None) -> bool:
        """
        Block, running tasks as they arrive, until predicate() is true.

        Args:
            predicate: Checked before each wait
            timeout: Give up after this many seconds. None waits forever.

        Returns:
            True if predicate became true, False on timeout
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while not predicate():
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                logger.debug("Dispatcher wait timed out")
                return False
            try:
                task = self._queue.get(timeout=remaining)
            except queue.Empty:
                return predicate()
            task()
        return True
