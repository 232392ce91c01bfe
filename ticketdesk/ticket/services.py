# ticketdesk/ticket/services.py
from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ticketdesk.auth.models import utcnow
from ticketdesk.core.context import RequestContext
from ticketdesk.core.errors import AlreadyClosed, NotFound, ValidationError
from ticketdesk.core.telemetry import add_breadcrumb
from ticketdesk.ticket.models import Ticket, TicketStatus
from ticketdesk.ticket.schemas import TicketCreate

LIST_PATH = "/tickets"
# Largest id a 64-bit INTEGER primary key can hold
MAX_TICKET_ID = 2**63 - 1


def detail_path(ticket_id: int) -> str:
    return f"{LIST_PATH}/{ticket_id}"


def list_tickets(db: Session, ctx: RequestContext, status: TicketStatus | None = None) -> list[Ticket]:
    user = ctx.require_user()
    stmt = select(Ticket).where(Ticket.owner_id == user.id)
    if status is not None:
        stmt = stmt.where(Ticket.status == status)
    stmt = stmt.order_by(Ticket.created_at.desc(), Ticket.id.desc())
    return list(db.scalars(stmt))


def get_ticket(db: Session, ctx: RequestContext, ticket_id: int) -> Ticket:
    user = ctx.require_user()
    if not 1 <= ticket_id <= MAX_TICKET_ID:
        raise NotFound("Ticket not found")
    ticket = db.get(Ticket, ticket_id)
    # Someone else's ticket looks exactly like a missing one
    if ticket is None or ticket.owner_id != user.id:
        raise NotFound("Ticket not found")
    return ticket


def create_ticket(db: Session, ctx: RequestContext, payload: TicketCreate) -> Ticket:
    user = ctx.require_user()
    title = payload.title.strip()
    if not title:
        raise ValidationError("Title must not be empty")

    db_ticket = Ticket(
        title=title,
        description=payload.description,
        status=TicketStatus.OPEN,
        owner_id=user.id,
    )
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)

    logger.info("Ticket {ticket_id} opened by user {user_id}", ticket_id=db_ticket.id, user_id=user.id)
    add_breadcrumb("ticket", "Ticket created", data={"ticket_id": db_ticket.id})
    ctx.revalidate(LIST_PATH)
    return db_ticket


def close_ticket(db: Session, ctx: RequestContext, ticket_id: int) -> Ticket:
    db_ticket = get_ticket(db, ctx, ticket_id)
    if db_ticket.status == TicketStatus.CLOSED:
        raise AlreadyClosed()

    # Conditional update: of two concurrent closes only one matches the OPEN row
    result = db.execute(
        update(Ticket)
        .where(Ticket.id == db_ticket.id, Ticket.status == TicketStatus.OPEN)
        .values(status=TicketStatus.CLOSED, closed_at=utcnow())
    )
    if result.rowcount == 0:
        db.rollback()
        raise AlreadyClosed()
    db.commit()
    db.refresh(db_ticket)

    logger.info("Ticket {ticket_id} closed", ticket_id=db_ticket.id)
    add_breadcrumb("ticket", "Ticket closed", data={"ticket_id": db_ticket.id})
    ctx.revalidate(LIST_PATH)
    ctx.revalidate(detail_path(db_ticket.id))
    return db_ticket
