"""Approval gate transitions and the auto-approval display overlay.

Stored gate state only changes through ``toggle_gate``. ``effective_status``
is a read-time projection: the finance gate shows AUTO_APPROVED while the
current margin clears the auto-approval threshold, and falls back to the
stored status as soon as it does not.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from dealdesk.models.enums import ApprovalStatus, GateName
from dealdesk.orchestration.state_machine import StateMachine
from dealdesk.schemas.deals import Approval, ApprovalGates
from dealdesk.services.margin import MarginBreakdown

logger = logging.getLogger(__name__)

AUTO_APPROVABLE_GATES = frozenset({GateName.FINANCE})

GATE_TRANSITIONS = StateMachine(
    {
        ApprovalStatus.PENDING: {ApprovalStatus.APPROVED},
        ApprovalStatus.APPROVED: {ApprovalStatus.PENDING},
        ApprovalStatus.REJECTED: {ApprovalStatus.APPROVED},
        ApprovalStatus.AUTO_APPROVED: set(),
    }
)


def effective_status(
    gate: GateName,
    stored: Approval,
    margin: MarginBreakdown | None = None,
) -> ApprovalStatus:
    if (
        gate in AUTO_APPROVABLE_GATES
        and stored.status == ApprovalStatus.PENDING
        and margin is not None
        and margin.auto_approvable
    ):
        return ApprovalStatus.AUTO_APPROVED
    return stored.status


def effective_gates(
    approvals: ApprovalGates,
    margin: MarginBreakdown | None = None,
) -> dict[GateName, ApprovalStatus]:
    return {gate: effective_status(gate, approval, margin) for gate, approval in approvals.items()}


def is_cleared(approvals: ApprovalGates, margin: MarginBreakdown | None = None) -> bool:
    """True when every gate reads APPROVED or AUTO_APPROVED."""
    cleared = {ApprovalStatus.APPROVED, ApprovalStatus.AUTO_APPROVED}
    return all(status in cleared for status in effective_gates(approvals, margin).values())


def toggle_gate(
    approvals: ApprovalGates,
    gate: GateName,
    approver_id: str,
    margin: MarginBreakdown | None = None,
    now: datetime | None = None,
) -> ApprovalGates:
    """Flip a gate between approved and pending, returning the new gate record.

    Gates that currently read AUTO_APPROVED are left untouched and the same
    record is returned.
    """
    gate = GateName(gate)
    stored = approvals.get(gate)
    current = effective_status(gate, stored, margin)
    if GATE_TRANSITIONS.is_terminal(current):
        logger.info(
            "approval.toggle.ignored",
            extra={"event": "approval.toggle.ignored", "gate": gate.value, "status": current.value},
        )
        return approvals

    target = ApprovalStatus.PENDING if current == ApprovalStatus.APPROVED else ApprovalStatus.APPROVED
    GATE_TRANSITIONS.assert_transition(current, target)

    if target == ApprovalStatus.APPROVED:
        updated = stored.model_copy(
            update={
                "status": target,
                "approver_id": approver_id,
                "timestamp": now or datetime.now(timezone.utc),
            }
        )
    else:
        updated = stored.model_copy(update={"status": target, "approver_id": None, "timestamp": None})
    return approvals.replace(gate, updated)
