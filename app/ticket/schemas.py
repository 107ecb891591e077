# app/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.ticket.workflow import Priority, TicketStatus


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class TicketBase(CamelModel):
    device_id: str = Field(..., min_length=1)
    complaint_type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    priority_level: Priority
    location: str = Field(..., min_length=1)
    title: str | None = None
    under_warranty: bool = False
    attachment: str | None = None
    assigned_to: str | None = None


class TicketCreate(TicketBase):
    pass


class TicketUpdate(CamelModel):
    status: TicketStatus | None = None
    description: str | None = Field(default=None, min_length=1)
    priority_level: Priority | None = None
    location: str | None = Field(default=None, min_length=1)
    resolution_details: str | None = None
    assigned_to: str | None = None


class TicketOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    device_id: str
    complaint_type: str
    title: str | None = None
    description: str
    priority_level: str
    location: str
    under_warranty: bool
    attachment: str | None = None
    assigned_to: str | None = None
    resolution_details: str | None = None
    status: str
    submitted_at: datetime
    updated_at: datetime | None = None


class ApprovalOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ticket_id: int
    level: str
    decision: str
    actor: str
    from_status: str
    to_status: str
    decided_at: datetime


class ApprovalResult(CamelModel):
    message: str
    ticket: TicketOut


class StatusCount(CamelModel):
    status: TicketStatus
    count: int
