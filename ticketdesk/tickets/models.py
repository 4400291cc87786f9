from __future__ import annotations

from dataclasses import dataclass

from .values import TicketDescription, TicketId, TicketStatus, TicketTitle


@dataclass(frozen=True, slots=True)
class TicketDraft:
    """Validated input used to create a ticket."""

    title: TicketTitle
    description: TicketDescription


@dataclass(frozen=True, slots=True)
class Ticket:
    """Read-only snapshot of a stored ticket."""

    id: TicketId
    title: TicketTitle
    description: TicketDescription
    status: TicketStatus


@dataclass(frozen=True, slots=True)
class TicketChanges:
    """Optional, already validated replacements for a ticket's mutable fields."""

    title: TicketTitle | None = None
    description: TicketDescription | None = None
    status: TicketStatus | None = None

    def as_fields(self) -> dict[str, object]:
        fields: dict[str, object] = {}
        if self.title is not None:
            fields["title"] = self.title
        if self.description is not None:
            fields["description"] = self.description
        if self.status is not None:
            fields["status"] = self.status
        return fields
