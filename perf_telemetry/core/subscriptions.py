"""
Synchronous fan-out of newly ingested samples to registered observers.
"""

import threading
from typing import Callable, Dict, List

from loguru import logger

from .models import Metric

MetricSubscriber = Callable[[Metric], None]


class SubscriptionBus:
    """Registry of metric observers with per-observer failure isolation."""

    def __init__(self):
        # dict keeps registration order and set semantics for repeated callbacks
        self._subscribers: Dict[MetricSubscriber, None] = {}
        self._lock = threading.Lock()
        self.failure_count = 0

    def subscribe(self, callback: MetricSubscriber) -> Callable[[], None]:
        """Register an observer and return a function that removes it."""
        if not callable(callback):
            raise TypeError("subscriber must be callable")

        with self._lock:
            self._subscribers[callback] = None

        def unsubscribe() -> None:
            with self._lock:
                self._subscribers.pop(callback, None)

        return unsubscribe

    def publish(self, metric: Metric) -> int:
        """Notify every observer in registration order.

        A failing observer is logged and skipped; it never stops the loop or
        reaches the caller. Returns the number of observers that failed.
        """
        with self._lock:
            subscribers: List[MetricSubscriber] = list(self._subscribers)

        failures = 0
        for subscriber in subscribers:
            try:
                subscriber(metric)
            except Exception as e:
                failures += 1
                logger.opt(exception=e).error(
                    f"Error in performance metric subscriber {_describe(subscriber)} "
                    f"for {metric.category.value}.{metric.name}: {e}"
                )

        if failures:
            with self._lock:
                self.failure_count += failures
        return failures

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)


def _describe(subscriber: MetricSubscriber) -> str:
    return getattr(subscriber, "__qualname__", None) or repr(subscriber)
