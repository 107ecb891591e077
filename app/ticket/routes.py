# app/ticket/routes.py
from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.core.security import ADMIN_ROLES, Principal, Role, get_current_principal, require_roles
from app.ticket.schemas import (
    ApprovalOut,
    ApprovalResult,
    StatusCount,
    TicketCreate,
    TicketOut,
    TicketUpdate,
)
from app.ticket import services as ticket_service
from app.ticket.notifications import notify_transition
from app.ticket.workflow import ApprovalAction, ApprovalLevel, TicketStatus, transition_for

router = APIRouter(prefix="/tickets", tags=["Tickets"])

# URL slug -> approval level
LEVELS = {
    "dc": ApprovalLevel.DC,
    "superuser": ApprovalLevel.SUPER_USER,
    "superadmin": ApprovalLevel.SUPER_ADMIN,
    "root": ApprovalLevel.ROOT,
}


@router.post("", response_model=TicketOut, status_code=201)
def create(ticket: TicketCreate, db: Session = Depends(get_db)):
    return ticket_service.create_ticket(db, ticket)


@router.get("", response_model=list[TicketOut])
def list_all(
    status: TicketStatus | None = Query(default=None, description="Filter by exact status label"),
    db: Session = Depends(get_db),
    _: Principal = Depends(get_current_principal),
):
    return ticket_service.list_all(db, status)


@router.get("/summary", response_model=dict[str, int])
def summary(db: Session = Depends(get_db), _: Principal = Depends(get_current_principal)):
    return ticket_service.status_summary(db)


@router.get("/count", response_model=StatusCount)
def count(
    status: TicketStatus = Query(..., description="Status label to count"),
    db: Session = Depends(get_db),
    _: Principal = Depends(get_current_principal),
):
    return StatusCount(status=status, count=ticket_service.count_by_status(db, status))


@router.get("/queue/{level}", response_model=list[TicketOut])
def queue(level: str, db: Session = Depends(get_db), _: Principal = Depends(get_current_principal)):
    if level not in LEVELS:
        raise NotFoundError(f"Unknown approval level '{level}'")
    return ticket_service.awaiting_queue(db, LEVELS[level])


@router.get("/{ticket_id}", response_model=TicketOut)
def get(ticket_id: int, db: Session = Depends(get_db)):
    return ticket_service.get_ticket(db, ticket_id)


@router.put("/{ticket_id}", response_model=TicketOut)
def update(
    ticket_id: int,
    ticket: TicketUpdate,
    db: Session = Depends(get_db),
    _: Principal = Depends(require_roles(*ADMIN_ROLES)),
):
    return ticket_service.update_ticket(db, ticket_id, ticket)


@router.delete("/{ticket_id}", response_model=TicketOut)
def delete(
    ticket_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require_roles(*ADMIN_ROLES)),
):
    return ticket_service.delete_ticket(db, ticket_id)


@router.get("/{ticket_id}/approvals", response_model=list[ApprovalOut])
def approvals(ticket_id: int, db: Session = Depends(get_db), _: Principal = Depends(get_current_principal)):
    return ticket_service.list_approvals(db, ticket_id)


# --- Per-stage approval endpoints ---

def _decide(
    db: Session,
    ticket_id: int,
    action: ApprovalAction,
    principal: Principal,
    background_tasks: BackgroundTasks,
) -> ApprovalResult:
    ticket = ticket_service.apply_approval(db, ticket_id, action, principal.name)
    transition = transition_for(action)
    background_tasks.add_task(notify_transition, ticket.id, ticket.device_id, transition, principal.name)
    return ApprovalResult(
        message=f"Ticket {transition.decision.value} by {transition.level.value} successfully",
        ticket=TicketOut.model_validate(ticket),
    )


@router.post("/{ticket_id}/approve/dc", response_model=ApprovalResult)
def approve_by_dc(
    ticket_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.DC)),
):
    return _decide(db, ticket_id, ApprovalAction.APPROVE_DC, principal, background_tasks)


@router.post("/{ticket_id}/reject/dc", response_model=ApprovalResult)
def reject_by_dc(
    ticket_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.DC)),
):
    return _decide(db, ticket_id, ApprovalAction.REJECT_DC, principal, background_tasks)


@router.post("/{ticket_id}/approve/superuser", response_model=ApprovalResult)
def approve_by_super_user(
    ticket_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SUPER_USER)),
):
    return _decide(db, ticket_id, ApprovalAction.APPROVE_SUPER_USER, principal, background_tasks)


@router.post("/{ticket_id}/approve/superadmin", response_model=ApprovalResult)
def approve_by_super_admin(
    ticket_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SUPER_ADMIN)),
):
    return _decide(db, ticket_id, ApprovalAction.APPROVE_SUPER_ADMIN, principal, background_tasks)


@router.post("/{ticket_id}/approve/root", response_model=ApprovalResult)
def approve_by_root(
    ticket_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.ROOT)),
):
    return _decide(db, ticket_id, ApprovalAction.APPROVE_ROOT, principal, background_tasks)


@router.post("/{ticket_id}/reject/root", response_model=ApprovalResult)
def reject_by_root(
    ticket_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.ROOT)),
):
    return _decide(db, ticket_id, ApprovalAction.REJECT_ROOT, principal, background_tasks)
