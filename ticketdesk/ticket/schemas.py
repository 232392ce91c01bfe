# ticketdesk/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ticketdesk.auth.models import as_utc
from ticketdesk.ticket.models import TicketStatus


class TicketBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""


class TicketCreate(TicketBase):
    pass


class TicketOut(TicketBase):
    id: int
    status: TicketStatus
    owner_id: int
    created_at: datetime
    closed_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("created_at", "closed_at")
    @classmethod
    def utc_timestamps(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)
