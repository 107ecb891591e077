# app/ticket/workflow.py
"""Approval workflow for device tickets.

The chain is Pending -> DC Approved -> Super User Approved -> Super Admin
Approved. A Root approver acts on DC Approved tickets as an alternative to
the Super User. ``TRANSITIONS`` is the only place transitions are defined;
every guard in the service layer reads from it.
"""
from enum import Enum
from typing import NamedTuple


class TicketStatus(str, Enum):
    PENDING = "Pending"
    DC_APPROVED = "DC Approved"
    REJECTED_BY_DC = "Rejected by DC"
    SUPER_USER_APPROVED = "Super User Approved"
    SUPER_ADMIN_APPROVED = "Super Admin Approved"
    ROOT_APPROVED = "Root Approved"
    REJECTED_BY_ROOT = "Rejected by Root"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"
    IN_PROGRESS = "In Progress"
    OPEN = "Open"
    COMPLETED = "Completed"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ApprovalLevel(str, Enum):
    DC = "DC"
    SUPER_USER = "Super User"
    SUPER_ADMIN = "Super Admin"
    ROOT = "Root"


class Decision(str, Enum):
    APPROVE = "approved"
    REJECT = "rejected"

    @property
    def verb(self) -> str:
        return "approve" if self is Decision.APPROVE else "reject"


class ApprovalAction(str, Enum):
    APPROVE_DC = "approve_dc"
    REJECT_DC = "reject_dc"
    APPROVE_SUPER_USER = "approve_super_user"
    APPROVE_SUPER_ADMIN = "approve_super_admin"
    APPROVE_ROOT = "approve_root"
    REJECT_ROOT = "reject_root"


class Transition(NamedTuple):
    level: ApprovalLevel
    decision: Decision
    source: TicketStatus
    target: TicketStatus


TRANSITIONS: dict[ApprovalAction, Transition] = {
    ApprovalAction.APPROVE_DC: Transition(
        ApprovalLevel.DC, Decision.APPROVE, TicketStatus.PENDING, TicketStatus.DC_APPROVED
    ),
    ApprovalAction.REJECT_DC: Transition(
        ApprovalLevel.DC, Decision.REJECT, TicketStatus.PENDING, TicketStatus.REJECTED_BY_DC
    ),
    ApprovalAction.APPROVE_SUPER_USER: Transition(
        ApprovalLevel.SUPER_USER, Decision.APPROVE, TicketStatus.DC_APPROVED, TicketStatus.SUPER_USER_APPROVED
    ),
    ApprovalAction.APPROVE_SUPER_ADMIN: Transition(
        ApprovalLevel.SUPER_ADMIN, Decision.APPROVE, TicketStatus.SUPER_USER_APPROVED, TicketStatus.SUPER_ADMIN_APPROVED
    ),
    # Root shares DC Approved with the Super User chain; first to act wins.
    ApprovalAction.APPROVE_ROOT: Transition(
        ApprovalLevel.ROOT, Decision.APPROVE, TicketStatus.DC_APPROVED, TicketStatus.ROOT_APPROVED
    ),
    ApprovalAction.REJECT_ROOT: Transition(
        ApprovalLevel.ROOT, Decision.REJECT, TicketStatus.DC_APPROVED, TicketStatus.REJECTED_BY_ROOT
    ),
}

INITIAL_STATUS = TicketStatus.PENDING


def transition_for(action: ApprovalAction) -> Transition:
    return TRANSITIONS[ApprovalAction(action)]


def actions_from(status: TicketStatus | str) -> list[ApprovalAction]:
    """Actions that are legal while a ticket sits in ``status``."""
    status = TicketStatus(status)
    return [action for action, t in TRANSITIONS.items() if t.source == status]


def awaiting(level: ApprovalLevel) -> list[TicketStatus]:
    """Statuses on which ``level`` still has a decision to make."""
    sources: list[TicketStatus] = []
    for t in TRANSITIONS.values():
        if t.level == level and t.source not in sources:
            sources.append(t.source)
    return sources
