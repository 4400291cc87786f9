"""Ticket service metrics."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricDefinition:
    name: str
    metric_type: str
    description: str
    label_names: tuple[str, ...] = ()


TICKETS_CREATED = "tickets_created_total"
TICKETS_PATCHED = "tickets_patched_total"
TICKET_LOOKUPS = "ticket_lookups_total"
TICKET_VALIDATION_FAILURES = "ticket_validation_failures_total"
TICKET_STORE_OPERATION_SECONDS = "ticket_store_operation_seconds"

DEFAULT_METRIC_DEFINITIONS: tuple[MetricDefinition, ...] = (
    MetricDefinition(TICKETS_CREATED, "counter", "Total number of tickets created."),
    MetricDefinition(TICKETS_PATCHED, "counter", "Total number of successful ticket patches."),
    MetricDefinition(TICKET_LOOKUPS, "counter", "Ticket lookups by id, split by hit or miss.", ("outcome",)),
    MetricDefinition(TICKET_VALIDATION_FAILURES, "counter", "Rejected ticket input, by field.", ("field",)),
    MetricDefinition(
        TICKET_STORE_OPERATION_SECONDS,
        "summary",
        "Time spent inside ticket store operations in seconds.",
        ("operation",),
    ),
)
