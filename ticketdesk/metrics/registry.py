from __future__ import annotations

from threading import Lock

from .base import Counter, Metric, Summary
from .definitions import MetricDefinition

_KINDS: dict[str, type[Metric]] = {"counter": Counter, "summary": Summary}


class MetricsRegistry:
    """Holds the metrics declared for one service instance, in declaration order."""

    def __init__(self) -> None:
        self._metrics: dict[str, Metric] = {}
        self._lock = Lock()

    def register(self, definition: MetricDefinition) -> Metric:
        try:
            kind = _KINDS[definition.metric_type]
        except KeyError:
            raise ValueError(f"Unsupported metric type: {definition.metric_type}") from None
        with self._lock:
            existing = self._metrics.get(definition.name)
            if existing is not None:
                if not isinstance(existing, kind) or existing.label_names != definition.label_names:
                    raise TypeError(f"Metric '{definition.name}' already registered differently")
                return existing
            metric = kind(definition.name, description=definition.description, label_names=definition.label_names)
            self._metrics[definition.name] = metric
            return metric

    def _lookup(self, name: str, kind: type[Metric]) -> Metric:
        with self._lock:
            metric = self._metrics.get(name)
        if metric is None:
            raise KeyError(f"Metric '{name}' is not registered")
        if not isinstance(metric, kind):
            raise TypeError(f"Metric '{name}' is a {metric.kind}, not a {kind.kind}")
        return metric

    def counter(self, name: str) -> Counter:
        return self._lookup(name, Counter)  # type: ignore[return-value]

    def summary(self, name: str) -> Summary:
        return self._lookup(name, Summary)  # type: ignore[return-value]

    def metrics(self) -> tuple[Metric, ...]:
        with self._lock:
            return tuple(self._metrics.values())
