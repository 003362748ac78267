# api/tickets/queries.py
from sqlalchemy import select, func

from db_models.ticket import Ticket


def select_all_tickets():
    """Newest tickets first."""
    return select(Ticket).order_by(Ticket.ticket_number.desc())


def select_ticket_by_id(ticket_id: int):
    return select(Ticket).where(Ticket.id == ticket_id)


def select_max_ticket_number():
    return select(func.max(Ticket.ticket_number))
