# ticketdesk/ticket/routes.py
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ticketdesk.auth.dependencies import get_context
from ticketdesk.core.context import RequestContext
from ticketdesk.core.database import get_db
from ticketdesk.ticket import services as ticket_service
from ticketdesk.ticket.models import TicketStatus
from ticketdesk.ticket.schemas import TicketCreate, TicketOut

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.post("", response_model=TicketOut, status_code=201)
def create(
    ticket: TicketCreate,
    response: Response,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    created = ticket_service.create_ticket(db, ctx, ticket)
    ctx.apply(response)
    return created


@router.get("", response_model=list[TicketOut])
def list_all(
    status: TicketStatus | None = Query(default=None, description="Filter by status: OPEN or CLOSED"),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    return ticket_service.list_tickets(db, ctx, status)


@router.get("/{ticket_id}", response_model=TicketOut)
def get(ticket_id: int, db: Session = Depends(get_db), ctx: RequestContext = Depends(get_context)):
    return ticket_service.get_ticket(db, ctx, ticket_id)


@router.post("/{ticket_id}/close", response_model=TicketOut)
def close(
    ticket_id: int,
    response: Response,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    closed = ticket_service.close_ticket(db, ctx, ticket_id)
    ctx.apply(response)
    return closed
