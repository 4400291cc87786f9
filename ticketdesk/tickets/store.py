from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from threading import Lock
from typing import Iterator

from .models import Ticket, TicketChanges, TicketDraft
from .values import TICKET_ID_MAX, TicketDescription, TicketId, TicketStatus, TicketTitle


class TicketEditor:
    """Exclusive, mutable view of a stored ticket handed out by ``TicketStore.get_mut``.

    Only ``title``, ``description`` and ``status`` can be replaced; the id is fixed.
    """

    __slots__ = ("_id", "_title", "_description", "_status", "_committed")

    def __init__(self, ticket: Ticket) -> None:
        self._id = ticket.id
        self._title = ticket.title
        self._description = ticket.description
        self._status = ticket.status
        self._committed: Ticket | None = None

    @property
    def id(self) -> TicketId:
        return self._id

    @property
    def title(self) -> TicketTitle:
        return self._title

    @title.setter
    def title(self, value: TicketTitle) -> None:
        if not isinstance(value, TicketTitle):
            raise TypeError("title must be a TicketTitle")
        self._title = value

    @property
    def description(self) -> TicketDescription:
        return self._description

    @description.setter
    def description(self, value: TicketDescription) -> None:
        if not isinstance(value, TicketDescription):
            raise TypeError("description must be a TicketDescription")
        self._description = value

    @property
    def status(self) -> TicketStatus:
        return self._status

    @status.setter
    def status(self, value: TicketStatus) -> None:
        self._status = TicketStatus(value)

    @property
    def committed(self) -> Ticket | None:
        """Snapshot written back to the store, set once the editing block exits cleanly."""
        return self._committed

    def _commit(self, original: Ticket) -> Ticket:
        self._committed = replace(original, title=self._title, description=self._description, status=self._status)
        return self._committed


class TicketStore:
    """Sole owner of ticket records and id allocation.

    Every operation runs under a single lock. Ids come from a counter that
    starts at zero and only ever increases.
    """

    def __init__(self) -> None:
        self._tickets: dict[TicketId, Ticket] = {}
        self._counter = 0
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tickets)

    def add_ticket(self, draft: TicketDraft) -> TicketId:
        return self.create(draft).id

    def create(self, draft: TicketDraft) -> Ticket:
        """Insert ``draft`` as a new ``ToDo`` ticket and return its snapshot."""

        with self._lock:
            if self._counter > TICKET_ID_MAX:
                raise OverflowError("Ticket id space exhausted")
            ticket = Ticket(
                id=TicketId(self._counter),
                title=draft.title,
                description=draft.description,
                status=TicketStatus.TODO,
            )
            self._counter += 1
            self._tickets[ticket.id] = ticket
            return ticket

    def get(self, ticket_id: TicketId) -> Ticket | None:
        with self._lock:
            return self._tickets.get(ticket_id)

    @contextmanager
    def get_mut(self, ticket_id: TicketId) -> Iterator[TicketEditor | None]:
        """Hold the lock and yield an editor for ``ticket_id`` (``None`` when absent).

        Edits are written back when the block exits normally and dropped if it raises.
        """

        with self._lock:
            current = self._tickets.get(ticket_id)
            if current is None:
                yield None
                return
            editor = TicketEditor(current)
            yield editor
            self._tickets[ticket_id] = editor._commit(current)

    def update(self, ticket_id: TicketId, changes: TicketChanges) -> Ticket | None:
        """Apply ``changes`` through ``get_mut`` and return the written snapshot."""

        with self.get_mut(ticket_id) as editor:
            if editor is None:
                return None
            if changes.title is not None:
                editor.title = changes.title
            if changes.description is not None:
                editor.description = changes.description
            if changes.status is not None:
                editor.status = changes.status
        return editor.committed
