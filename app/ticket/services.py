# app/ticket/services.py
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, PreconditionFailedError, ValidationFailedError
from app.core.logging_config import get_logger
from app.ticket.models import ApprovalRecord, Ticket, utcnow
from app.ticket.schemas import TicketCreate, TicketUpdate
from app.ticket.workflow import (
    INITIAL_STATUS,
    ApprovalAction,
    ApprovalLevel,
    TicketStatus,
    awaiting,
    transition_for,
)

log = get_logger("ticket")


# --- CRUD ---

def get_ticket(db: Session, ticket_id: int) -> Ticket:
    db_ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
    if not db_ticket:
        raise NotFoundError()
    return db_ticket


def create_ticket(db: Session, payload: TicketCreate) -> Ticket:
    db_ticket = Ticket(**payload.model_dump(), status=INITIAL_STATUS.value, submitted_at=utcnow())
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    log.info("Ticket %s submitted for device %s", db_ticket.id, db_ticket.device_id)
    return db_ticket


def update_ticket(db: Session, ticket_id: int, payload: TicketUpdate) -> Ticket:
    """Overwrite mutable fields directly. No workflow check is made here;
    callers must hold an administrative role."""
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationFailedError("No fields provided to update")
    db_ticket = get_ticket(db, ticket_id)
    for field, value in changes.items():
        setattr(db_ticket, field, value)
    db.commit()
    db.refresh(db_ticket)
    log.info("Ticket %s updated directly: %s", ticket_id, sorted(changes))
    return db_ticket


def delete_ticket(db: Session, ticket_id: int) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    db.delete(db_ticket)
    db.commit()
    log.info("Ticket %s deleted", ticket_id)
    return db_ticket


# --- Approval workflow ---

def apply_approval(db: Session, ticket_id: int, action: ApprovalAction, actor: str) -> Ticket:
    """Move a ticket one step along the approval chain.

    The status check and the write are one conditional UPDATE, so of two
    concurrent callers only one can succeed; the other sees no affected
    row and gets PreconditionFailedError.
    """
    transition = transition_for(action)
    affected = (
        db.query(Ticket)
        .filter(Ticket.id == ticket_id, Ticket.status == transition.source.value)
        .update(
            {Ticket.status: transition.target.value, Ticket.updated_at: utcnow()},
            synchronize_session=False,
        )
    )
    if affected == 0:
        db.rollback()
        current = db.query(Ticket.status).filter(Ticket.id == ticket_id).scalar()
        if current is None:
            raise NotFoundError()
        log.warning(
            "Rejected %s on ticket %s: status is %r, requires %r",
            ApprovalAction(action).value, ticket_id, current, transition.source.value,
        )
        raise PreconditionFailedError(
            f"Ticket must be '{transition.source.value}' before {transition.level.value} "
            f"can {transition.decision.verb} it "
            f"(current status: '{current}')"
        )

    db.add(ApprovalRecord(
        ticket_id=ticket_id,
        level=transition.level.value,
        decision=transition.decision.value,
        actor=actor,
        from_status=transition.source.value,
        to_status=transition.target.value,
        decided_at=utcnow(),
    ))
    db.commit()
    log.info(
        "Ticket %s: %s -> %s by %s (%s)",
        ticket_id, transition.source.value, transition.target.value, actor, transition.level.value,
    )
    return get_ticket(db, ticket_id)


def list_approvals(db: Session, ticket_id: int) -> list[ApprovalRecord]:
    get_ticket(db, ticket_id)
    return (
        db.query(ApprovalRecord)
        .filter(ApprovalRecord.ticket_id == ticket_id)
        .order_by(ApprovalRecord.decided_at, ApprovalRecord.id)
        .all()
    )


# --- Queries ---

def list_all(db: Session, status: TicketStatus | str | None = None) -> list[Ticket]:
    query = db.query(Ticket)
    if status:
        query = query.filter(Ticket.status == TicketStatus(status).value)
    return query.order_by(Ticket.submitted_at.desc(), Ticket.id.desc()).all()


def count_by_status(db: Session, status: TicketStatus | str) -> int:
    return db.query(func.count(Ticket.id)).filter(Ticket.status == TicketStatus(status).value).scalar()


def status_summary(db: Session) -> dict[str, int]:
    rows = db.query(Ticket.status, func.count(Ticket.id)).group_by(Ticket.status).all()
    counts = dict(rows)
    return {s.value: counts.get(s.value, 0) for s in TicketStatus}


def awaiting_queue(db: Session, level: ApprovalLevel) -> list[Ticket]:
    """Tickets on which ``level`` has a decision pending, newest first."""
    statuses = [s.value for s in awaiting(level)]
    return (
        db.query(Ticket)
        .filter(Ticket.status.in_(statuses))
        .order_by(Ticket.submitted_at.desc(), Ticket.id.desc())
        .all()
    )
