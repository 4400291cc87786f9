from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ticketdesk.dependencies.tickets import TicketServiceDep
from ticketdesk.tickets import (
    Ticket,
    TicketFieldError,
    TicketId,
    TicketNotFoundError,
    TicketStatus,
)
from ticketdesk.tickets.values import TICKET_ID_MAX

router = APIRouter(prefix="/tickets", tags=["tickets"])

TicketIdPath = Annotated[int, Path(ge=0, le=TICKET_ID_MAX, description="Ticket id")]

_NOT_FOUND = {404: {"description": "Ticket not found"}}
_INVALID = {400: {"description": "Invalid title or description"}}


class TicketCreateRequest(BaseModel):
    title: str
    description: str


class TicketPatchRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    status: TicketStatus | None = None


class TicketResponse(BaseModel):
    id: int
    title: str
    description: str
    status: TicketStatus

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> "TicketResponse":
        return cls(
            id=ticket.id.value,
            title=ticket.title.value,
            description=ticket.description.value,
            status=ticket.status,
        )


def _bad_request(exc: TicketFieldError) -> JSONResponse:
    # body is a bare JSON string naming the rejected field
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f"Invalid {exc.field}: {exc}")


@router.post(
    "",
    response_model=TicketResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
)
async def create_ticket(payload: TicketCreateRequest, service: TicketServiceDep):
    try:
        ticket = await service.create_ticket(title=payload.title, description=payload.description)
    except TicketFieldError as exc:
        return _bad_request(exc)
    return TicketResponse.from_ticket(ticket)


@router.get("/{ticket_id}", response_model=TicketResponse, responses=_NOT_FOUND)
async def get_ticket(ticket_id: TicketIdPath, service: TicketServiceDep):
    try:
        ticket = await service.get_ticket(TicketId(ticket_id))
    except TicketNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return TicketResponse.from_ticket(ticket)


@router.patch("/{ticket_id}", response_model=TicketResponse, responses={**_NOT_FOUND, **_INVALID})
async def patch_ticket(ticket_id: TicketIdPath, payload: TicketPatchRequest, service: TicketServiceDep):
    try:
        ticket = await service.patch_ticket(
            TicketId(ticket_id),
            title=payload.title,
            description=payload.description,
            status=payload.status,
        )
    except TicketNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    except TicketFieldError as exc:
        return _bad_request(exc)
    return TicketResponse.from_ticket(ticket)
