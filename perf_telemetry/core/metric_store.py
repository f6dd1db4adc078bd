"""
Bounded per-category storage for metric samples.

Every category owns an independent ring buffer of the most recent samples.
The store is the only component that creates or evicts samples; readers get
list copies taken under the store lock.
"""

import math
import numbers
import threading
import time
import uuid
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Mapping, Optional, Union

from loguru import logger

from .models import Metric, MetricCategory, MetricUnit
from ..utils.exceptions import InvalidMetricError


def coerce_category(category: Union[MetricCategory, str]) -> MetricCategory:
    """Resolve a category member or its string value."""
    try:
        return MetricCategory(category)
    except ValueError:
        allowed = ", ".join(c.value for c in MetricCategory)
        raise InvalidMetricError(
            f"Unknown metric category {category!r} (expected one of: {allowed})",
            field="category",
            value=category,
        ) from None


def coerce_unit(unit: Union[MetricUnit, str]) -> MetricUnit:
    """Resolve a unit member or its string value."""
    try:
        return MetricUnit(unit)
    except ValueError:
        allowed = ", ".join(u.value for u in MetricUnit)
        raise InvalidMetricError(
            f"Unknown metric unit {unit!r} (expected one of: {allowed})",
            field="unit",
            value=unit,
        ) from None


def validate_value(value: Any) -> float:
    """Return value as a finite float or raise InvalidMetricError."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidMetricError(
            f"Metric value must be a real number, got {type(value).__name__}",
            field="value",
            value=value,
        )
    value = float(value)
    if not math.isfinite(value):
        raise InvalidMetricError(f"Metric value must be finite, got {value}", field="value", value=value)
    return value


def validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidMetricError("Metric name must be a non-empty string", field="name", value=name)
    return name


def validate_tags(tags: Optional[Iterable[str]]) -> frozenset:
    if tags is None:
        return frozenset()
    if isinstance(tags, str):
        # A bare string would otherwise be split into characters
        return frozenset([tags])
    tag_set = frozenset(tags)
    for tag in tag_set:
        if not isinstance(tag, str):
            raise InvalidMetricError(f"Metric tags must be strings, got {tag!r}", field="tags", value=tag)
    return tag_set


class MetricStore:
    """Per-category FIFO ring buffers of recent samples."""

    def __init__(self, capacity: int = 100, clock: Callable[[], float] = time.time):
        """Initialize metric store.

        Args:
            capacity: Maximum samples kept per category
            clock: Source of sample timestamps, seconds since the epoch
        """
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._clock = clock
        self._buffers: Dict[MetricCategory, Deque[Metric]] = {}
        self._lock = threading.RLock()
        self._evicted_count = 0

    def add(
        self,
        category: Union[MetricCategory, str],
        name: str,
        value: float,
        unit: Union[MetricUnit, str],
        metadata: Optional[Mapping[str, Any]] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Metric:
        """Validate and append a new sample, evicting the oldest at capacity."""
        metric = Metric(
            id=f"metric_{uuid.uuid4().hex}",
            name=validate_name(name),
            value=validate_value(value),
            unit=coerce_unit(unit),
            category=coerce_category(category),
            timestamp=self._clock(),
            metadata=dict(metadata or {}),
            tags=validate_tags(tags),
        )

        with self._lock:
            buffer = self._buffers.get(metric.category)
            if buffer is None:
                buffer = deque(maxlen=self.capacity)
                self._buffers[metric.category] = buffer
            if len(buffer) == self.capacity:
                self._evicted_count += 1
            buffer.append(metric)

        return metric

    def snapshot(self, since: Optional[float] = None) -> List[Metric]:
        """Copy of all samples across categories, optionally strictly newer than since."""
        with self._lock:
            metrics = [m for buffer in self._buffers.values() for m in buffer]
        if since is not None:
            metrics = [m for m in metrics if m.timestamp > since]
        return metrics

    def category_snapshot(self, category: Union[MetricCategory, str]) -> List[Metric]:
        """Copy of one category's buffer, oldest first."""
        category = coerce_category(category)
        with self._lock:
            return list(self._buffers.get(category, ()))

    def categories(self) -> List[MetricCategory]:
        """Categories that have received samples, in first-seen order."""
        with self._lock:
            return list(self._buffers.keys())

    def total_count(self) -> int:
        with self._lock:
            return sum(len(buffer) for buffer in self._buffers.values())

    @property
    def evicted_count(self) -> int:
        return self._evicted_count

    def clear(self) -> None:
        """Drop every buffered sample."""
        with self._lock:
            dropped = sum(len(buffer) for buffer in self._buffers.values())
            self._buffers.clear()
            self._evicted_count = 0
        logger.debug(f"Cleared metric store ({dropped} samples dropped)")

    def __len__(self) -> int:
        return self.total_count()
