from __future__ import annotations

import logging
from typing import Callable, TypeVar

from opentelemetry import trace

from ticketdesk.metrics import MetricsRegistry, create_metrics_registry
from ticketdesk.metrics.definitions import (
    TICKET_LOOKUPS,
    TICKET_STORE_OPERATION_SECONDS,
    TICKET_VALIDATION_FAILURES,
    TICKETS_CREATED,
    TICKETS_PATCHED,
)

from .models import Ticket, TicketChanges, TicketDraft
from .store import TicketStore
from .values import (
    TicketDescription,
    TicketFieldError,
    TicketId,
    TicketStatus,
    TicketTitle,
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

_T = TypeVar("_T")


class TicketServiceError(RuntimeError):
    """Base error for ticket service issues."""


class TicketNotFoundError(TicketServiceError):
    """Raised when a ticket could not be located."""

    def __init__(self, ticket_id: TicketId) -> None:
        super().__init__(f"Ticket {ticket_id} not found")
        self.ticket_id = ticket_id


class TicketService:
    """Turn raw request input into validated values and drive the store.

    Validation happens before the store lock is taken; a rejected field
    leaves the store untouched.
    """

    def __init__(self, store: TicketStore, *, metrics: MetricsRegistry | None = None) -> None:
        self._store = store
        self._metrics = metrics or create_metrics_registry()

    @property
    def store(self) -> TicketStore:
        return self._store

    @property
    def metrics(self) -> MetricsRegistry:
        return self._metrics

    async def create_ticket(self, *, title: str, description: str) -> Ticket:
        with tracer.start_as_current_span("tickets.create") as span:
            draft = TicketDraft(
                title=self._validate(TicketTitle.try_from, title),
                description=self._validate(TicketDescription.try_from, description),
            )
            with self._timed("add"):
                ticket = self._store.create(draft)
            span.set_attribute("ticket.id", str(ticket.id))
        self._metrics.counter(TICKETS_CREATED).inc()
        logger.info("Created ticket %s", ticket.id)
        return ticket

    async def get_ticket(self, ticket_id: TicketId) -> Ticket:
        with tracer.start_as_current_span("tickets.get", attributes={"ticket.id": str(ticket_id)}):
            with self._timed("get"):
                ticket = self._store.get(ticket_id)
        self._record_lookup(ticket_id, found=ticket is not None)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    async def patch_ticket(
        self,
        ticket_id: TicketId,
        *,
        title: str | None = None,
        description: str | None = None,
        status: TicketStatus | str | None = None,
    ) -> Ticket:
        """Replace only the provided fields of ``ticket_id``."""

        with tracer.start_as_current_span("tickets.patch", attributes={"ticket.id": str(ticket_id)}):
            if self._store.get(ticket_id) is None:
                self._record_lookup(ticket_id, found=False)
                raise TicketNotFoundError(ticket_id)

            changes = TicketChanges(
                title=None if title is None else self._validate(TicketTitle.try_from, title),
                description=None if description is None else self._validate(TicketDescription.try_from, description),
                status=None if status is None else TicketStatus(status),
            )
            with self._timed("update"):
                updated = self._store.update(ticket_id, changes)
            if updated is None:
                self._record_lookup(ticket_id, found=False)
                raise TicketNotFoundError(ticket_id)
        self._metrics.counter(TICKETS_PATCHED).inc()
        logger.info("Patched ticket %s fields=%s", ticket_id, sorted(changes.as_fields()))
        return updated

    def _timed(self, operation: str):
        return self._metrics.summary(TICKET_STORE_OPERATION_SECONDS).time(labels={"operation": operation})

    def _record_lookup(self, ticket_id: TicketId, *, found: bool) -> None:
        self._metrics.counter(TICKET_LOOKUPS).inc(labels={"outcome": "hit" if found else "miss"})
        if not found:
            logger.debug("Ticket %s not found", ticket_id)

    def _validate(self, factory: Callable[[str], _T], raw: str) -> _T:
        try:
            return factory(raw)
        except TicketFieldError as exc:
            self._metrics.counter(TICKET_VALIDATION_FAILURES).inc(labels={"field": exc.field})
            logger.debug("Rejected ticket %s: %s", exc.field, exc)
            raise
