# api/tickets/models.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from db_models.ticket import TicketArea, TicketPriority, TicketStatus


class TicketCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    area: TicketArea
    description: str | None = None
    priority: TicketPriority = TicketPriority.MEDIUM

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value


class TicketStatusUpdate(BaseModel):
    status: TicketStatus


class TicketPriorityUpdate(BaseModel):
    priority: TicketPriority


class TicketRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ticket_number: int
    title: str
    area: str
    description: str | None = None
    status: TicketStatus
    priority: TicketPriority
    created_at: datetime
    updated_at: datetime | None = None


class TicketListResponse(BaseModel):
    tickets: list[TicketRead]
    open_count: int
    total_count: int
