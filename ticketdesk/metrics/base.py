"""Counter and summary primitives backing the ticket metrics."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from contextlib import contextmanager
from threading import Lock
from time import perf_counter
from typing import Iterable, Iterator, Mapping

LabelValues = tuple[str, ...]
Sample = tuple[str, LabelValues, float]


class Metric(ABC):
    """A named series family keyed by label values."""

    kind: str

    def __init__(self, name: str, *, description: str = "", label_names: Iterable[str] = ()) -> None:
        self.name = name
        self.description = description
        self.label_names = tuple(label_names)
        self._lock = Lock()

    def _key(self, labels: Mapping[str, str] | None) -> LabelValues:
        given = dict(labels or {})
        if set(given) != set(self.label_names):
            raise ValueError(
                f"Metric '{self.name}' expects labels {self.label_names}, got {tuple(sorted(given))}"
            )
        return tuple(str(given[name]) for name in self.label_names)

    @abstractmethod
    def samples(self) -> list[Sample]:
        """Return ``(suffix, label values, value)`` triples for export."""


class Counter(Metric):
    kind = "counter"

    def __init__(self, name: str, *, description: str = "", label_names: Iterable[str] = ()) -> None:
        super().__init__(name, description=description, label_names=label_names)
        self._values: dict[LabelValues, float] = defaultdict(float)

    def inc(self, amount: float = 1.0, *, labels: Mapping[str, str] | None = None) -> None:
        if amount < 0:
            raise ValueError("Counters can only be incremented")
        key = self._key(labels)
        with self._lock:
            self._values[key] += amount

    def value(self, *, labels: Mapping[str, str] | None = None) -> float:
        key = self._key(labels)
        with self._lock:
            return self._values.get(key, 0.0)

    def samples(self) -> list[Sample]:
        with self._lock:
            return [("", key, value) for key, value in self._values.items()]


class Summary(Metric):
    """Observation count and running total, exported as ``_count``/``_sum``."""

    kind = "summary"

    def __init__(self, name: str, *, description: str = "", label_names: Iterable[str] = ()) -> None:
        super().__init__(name, description=description, label_names=label_names)
        self._counts: dict[LabelValues, int] = defaultdict(int)
        self._sums: dict[LabelValues, float] = defaultdict(float)

    def observe(self, value: float, *, labels: Mapping[str, str] | None = None) -> None:
        key = self._key(labels)
        with self._lock:
            self._counts[key] += 1
            self._sums[key] += value

    def count(self, *, labels: Mapping[str, str] | None = None) -> int:
        key = self._key(labels)
        with self._lock:
            return self._counts.get(key, 0)

    @contextmanager
    def time(self, *, labels: Mapping[str, str] | None = None) -> Iterator[None]:
        """Observe the wall-clock duration of the block in seconds."""

        start = perf_counter()
        try:
            yield
        finally:
            self.observe(perf_counter() - start, labels=labels)

    def samples(self) -> list[Sample]:
        with self._lock:
            result: list[Sample] = []
            for key, count in self._counts.items():
                result.append(("_count", key, float(count)))
                result.append(("_sum", key, self._sums[key]))
            return result
