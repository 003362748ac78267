# api/tickets/db_manager.py
"""
Business logic for the support-ticket queue.

Status and priority change independently; any status can follow any other.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core import events
from db_models.ticket import Ticket, TicketPriority, TicketStatus
from .models import TicketCreate
from . import queries

logger = logging.getLogger(__name__)


class TicketNotFoundError(Exception):
    pass


class TicketNumberConflictError(Exception):
    """Raised when two tickets race for the same sequential number."""
    pass


async def list_tickets(db: AsyncSession) -> list[Ticket]:
    result = await db.execute(queries.select_all_tickets())
    return list(result.scalars().all())


async def get_ticket_or_raise(db: AsyncSession, ticket_id: int) -> Ticket:
    result = await db.execute(queries.select_ticket_by_id(ticket_id))
    ticket = result.scalar_one_or_none()
    if ticket is None:
        raise TicketNotFoundError(f"Ticket {ticket_id} not found")
    return ticket


async def next_ticket_number(db: AsyncSession) -> int:
    result = await db.execute(queries.select_max_ticket_number())
    return (result.scalar() or 0) + 1


async def create_ticket(db: AsyncSession, data: TicketCreate) -> Ticket:
    """
    Open a new ticket with the next sequential number.

    Raises:
        TicketNumberConflictError: If the number was taken concurrently
    """
    number = await next_ticket_number(db)
    ticket = Ticket(
        ticket_number=number,
        title=data.title,
        area=data.area.value,
        description=data.description,
        priority=data.priority.value,
        status=TicketStatus.OPEN.value,
    )
    db.add(ticket)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Ticket number %s already taken", number)
        raise TicketNumberConflictError("Ticket number already taken, please retry") from exc

    await db.refresh(ticket)
    logger.info("Opened ticket #%s (%s)", ticket.ticket_number, ticket.area)
    events.change_feed.publish(events.TICKETS)
    return ticket


async def set_status(db: AsyncSession, ticket_id: int, status: TicketStatus) -> Ticket:
    """
    Raises:
        TicketNotFoundError: If ticket doesn't exist
    """
    ticket = await get_ticket_or_raise(db, ticket_id)
    ticket.status = status.value
    await db.commit()
    await db.refresh(ticket)
    logger.info("Ticket #%s status -> %s", ticket.ticket_number, status.value)
    events.change_feed.publish(events.TICKETS)
    return ticket


async def set_priority(db: AsyncSession, ticket_id: int, priority: TicketPriority) -> Ticket:
    """
    Raises:
        TicketNotFoundError: If ticket doesn't exist
    """
    ticket = await get_ticket_or_raise(db, ticket_id)
    ticket.priority = priority.value
    await db.commit()
    await db.refresh(ticket)
    logger.info("Ticket #%s priority -> %s", ticket.ticket_number, priority.value)
    events.change_feed.publish(events.TICKETS)
    return ticket
