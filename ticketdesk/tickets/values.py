"""Validated value types making up a ticket record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

TITLE_MAX_BYTES = 50
DESCRIPTION_MAX_BYTES = 500
TICKET_ID_MAX = 2**64 - 1


class TicketStatus(str, Enum):
    """Workflow state of a ticket. Any state may move to any other."""

    TODO = "ToDo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"


class FieldErrorReason(str, Enum):
    EMPTY = "empty"
    TOO_LONG = "too_long"
    NOT_UTF8 = "not_utf8"


class TicketFieldError(ValueError):
    """Raised when raw input cannot be converted into a ticket field."""

    field: str = "field"

    def __init__(self, reason: FieldErrorReason, limit: int) -> None:
        self.reason = reason
        self.limit = limit
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.reason is FieldErrorReason.EMPTY:
            return f"The {self.field} cannot be empty"
        if self.reason is FieldErrorReason.NOT_UTF8:
            return f"The {self.field} must be valid UTF-8 text"
        return f"The {self.field} cannot be longer than {self.limit} bytes"


class TicketTitleError(TicketFieldError):
    field = "title"


class TicketDescriptionError(TicketFieldError):
    field = "description"


def _check_length(raw: str, limit: int, error: type[TicketFieldError]) -> None:
    if not isinstance(raw, str):
        raise TypeError(f"Expected str for ticket {error.field}, got {type(raw).__name__}")
    if not raw:
        raise error(FieldErrorReason.EMPTY, limit)
    try:
        size = len(raw.encode("utf-8"))
    except UnicodeEncodeError as exc:
        # lone surrogates decoded from JSON escapes
        raise error(FieldErrorReason.NOT_UTF8, limit) from exc
    if size > limit:
        raise error(FieldErrorReason.TOO_LONG, limit)


@dataclass(frozen=True, slots=True, order=True)
class TicketTitle:
    """Non-empty title of at most 50 UTF-8 bytes, stored verbatim."""

    value: str

    def __post_init__(self) -> None:
        _check_length(self.value, TITLE_MAX_BYTES, TicketTitleError)

    @classmethod
    def try_from(cls, raw: str) -> TicketTitle:
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True, order=True)
class TicketDescription:
    """Non-empty description of at most 500 UTF-8 bytes, stored verbatim."""

    value: str

    def __post_init__(self) -> None:
        _check_length(self.value, DESCRIPTION_MAX_BYTES, TicketDescriptionError)

    @classmethod
    def try_from(cls, raw: str) -> TicketDescription:
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True, order=True)
class TicketId:
    """Store-assigned identifier; an unsigned 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Ticket id must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= TICKET_ID_MAX:
            raise ValueError(f"Ticket id out of range: {self.value}")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
