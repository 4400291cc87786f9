"""Ticket domain: validated values, the in-memory store and its service."""

from .models import Ticket, TicketChanges, TicketDraft
from .service import TicketNotFoundError, TicketService, TicketServiceError
from .store import TicketEditor, TicketStore
from .values import (
    DESCRIPTION_MAX_BYTES,
    TITLE_MAX_BYTES,
    FieldErrorReason,
    TicketDescription,
    TicketDescriptionError,
    TicketFieldError,
    TicketId,
    TicketStatus,
    TicketTitle,
    TicketTitleError,
)

__all__ = [
    "DESCRIPTION_MAX_BYTES",
    "TITLE_MAX_BYTES",
    "FieldErrorReason",
    "Ticket",
    "TicketChanges",
    "TicketDescription",
    "TicketDescriptionError",
    "TicketDraft",
    "TicketEditor",
    "TicketFieldError",
    "TicketId",
    "TicketNotFoundError",
    "TicketService",
    "TicketServiceError",
    "TicketStatus",
    "TicketStore",
    "TicketTitle",
    "TicketTitleError",
]
