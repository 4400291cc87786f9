"""In-process metrics for the ticket service."""
from .base import Counter, Summary
from .definitions import DEFAULT_METRIC_DEFINITIONS, MetricDefinition
from .exporters import PrometheusExporter
from .registry import MetricsRegistry


def create_metrics_registry() -> MetricsRegistry:
    """Return a registry holding every ticket metric."""
    registry = MetricsRegistry()
    for definition in DEFAULT_METRIC_DEFINITIONS:
        registry.register(definition)
    return registry


__all__ = [
    "Counter",
    "MetricDefinition",
    "MetricsRegistry",
    "PrometheusExporter",
    "Summary",
    "create_metrics_registry",
]
