# app/ticket/models.py
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.ticket.workflow import INITIAL_STATUS


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(String, index=True, nullable=False)
    complaint_type = Column(String, nullable=False)
    title = Column(String, nullable=True)
    description = Column(Text, nullable=False)
    priority_level = Column(String, nullable=False)
    location = Column(String, nullable=False)
    under_warranty = Column(Boolean, default=False, nullable=False)
    attachment = Column(String, nullable=True)
    assigned_to = Column(String, nullable=True)
    resolution_details = Column(Text, nullable=True)
    status = Column(String, default=INITIAL_STATUS.value, index=True, nullable=False)
    submitted_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    approvals = relationship(
        "ApprovalRecord",
        back_populates="ticket",
        cascade="all, delete-orphan",
        order_by="ApprovalRecord.decided_at",
    )


class ApprovalRecord(Base):
    __tablename__ = "ticket_approvals"

    id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(Integer, ForeignKey("tickets.id", ondelete="CASCADE"), index=True, nullable=False)
    level = Column(String, nullable=False)
    decision = Column(String, nullable=False)
    actor = Column(String, nullable=False)
    from_status = Column(String, nullable=False)
    to_status = Column(String, nullable=False)
    decided_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    ticket = relationship("Ticket", back_populates="approvals")
