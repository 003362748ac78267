# api/tickets/views.py
"""
Support-ticket endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from db_models.ticket import TicketStatus
from .models import (
    TicketCreate,
    TicketRead,
    TicketListResponse,
    TicketStatusUpdate,
    TicketPriorityUpdate,
)
from . import db_manager

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get(
    "",
    response_model=TicketListResponse,
    summary="List tickets",
)
async def list_tickets_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> TicketListResponse:
    tickets = await db_manager.list_tickets(db)
    return TicketListResponse(
        tickets=[TicketRead.model_validate(t) for t in tickets],
        open_count=sum(1 for t in tickets if t.status == TicketStatus.OPEN.value),
        total_count=len(tickets),
    )


@router.post(
    "",
    response_model=TicketRead,
    status_code=status.HTTP_201_CREATED,
    summary="Open a ticket",
)
async def create_ticket_endpoint(
    payload: TicketCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> TicketRead:
    try:
        ticket = await db_manager.create_ticket(db, payload)
    except db_manager.TicketNumberConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    return TicketRead.model_validate(ticket)


@router.patch(
    "/{ticket_id}/status",
    response_model=TicketRead,
    summary="Change ticket status",
)
async def set_status_endpoint(
    ticket_id: int,
    payload: TicketStatusUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> TicketRead:
    try:
        ticket = await db_manager.set_status(db, ticket_id, payload.status)
    except db_manager.TicketNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return TicketRead.model_validate(ticket)


@router.patch(
    "/{ticket_id}/priority",
    response_model=TicketRead,
    summary="Change ticket priority",
)
async def set_priority_endpoint(
    ticket_id: int,
    payload: TicketPriorityUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> TicketRead:
    try:
        ticket = await db_manager.set_priority(db, ticket_id, payload.priority)
    except db_manager.TicketNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return TicketRead.model_validate(ticket)
