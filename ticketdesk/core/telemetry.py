"""Log routing and span export for the ticket service."""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ticketdesk.core.config import Settings

# Server loggers share the service handler instead of installing their own.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def build_logging_config(settings: Settings) -> dict[str, Any]:
    handler = {"class": "logging.StreamHandler", "formatter": "plain"}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"plain": {"format": settings.log_format}},
        "handlers": {"console": handler},
        "loggers": {
            "ticketdesk": {"level": settings.log_level},
            **{name: {"handlers": ["console"], "level": settings.log_level, "propagate": False} for name in _SERVER_LOGGERS},
        },
        "root": {"handlers": ["console"], "level": settings.log_level},
    }


def configure_logging(settings: Settings) -> logging.Logger:
    dictConfig(build_logging_config(settings))
    return logging.getLogger("ticketdesk")


def start_tracing(settings: Settings) -> TracerProvider | None:
    """Install an OTLP exporting tracer provider when tracing is enabled.

    Without it the ``tickets.*`` spans go to the API's no-op provider.
    """

    if not settings.otel_enabled:
        return None

    provider = TracerProvider(
        resource=Resource.create(
            {"service.name": settings.app_name, "deployment.environment": settings.environment}
        )
    )
    exporter = OTLPSpanExporter(endpoint=settings.otel_endpoint) if settings.otel_endpoint else OTLPSpanExporter()
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return provider


def stop_tracing(provider: TracerProvider | None) -> None:
    if provider is not None:
        provider.shutdown()
