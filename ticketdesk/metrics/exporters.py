"""Prometheus text exposition of a ``MetricsRegistry``."""
from __future__ import annotations

import logging

from .registry import MetricsRegistry

logger = logging.getLogger(__name__)

PROMETHEUS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


class PrometheusExporter:
    def __init__(self, registry: MetricsRegistry) -> None:
        self.registry = registry

    def export(self) -> str:
        lines: list[str] = []
        for metric in self.registry.metrics():
            lines.append(f"# HELP {metric.name} {metric.description}")
            lines.append(f"# TYPE {metric.name} {metric.kind}")
            for suffix, label_values, value in metric.samples():
                label_text = ""
                if label_values:
                    pairs = ",".join(
                        f'{name}="{_escape(raw)}"' for name, raw in zip(metric.label_names, label_values)
                    )
                    label_text = "{" + pairs + "}"
                lines.append(f"{metric.name}{suffix}{label_text} {value}")
        payload = "\n".join(lines) + "\n"
        logger.debug("Rendered %d metric families", len(self.registry.metrics()))
        return payload
