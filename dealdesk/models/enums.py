"""Canonical enum values for the CRM domain."""

from __future__ import annotations

import enum


class Stage(str, enum.Enum):
    """Pipeline stages, declared in board order."""

    DISCOVER = "DISCOVER"
    UNDERSTAND = "UNDERSTAND"
    PROPOSAL = "PROPOSAL"
    NEGOTIATING = "NEGOTIATING"
    CLOSED = "CLOSED"

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]

    @classmethod
    def ordered(cls) -> list["Stage"]:
        return list(cls)


STAGE_LABELS: dict[Stage, str] = {
    Stage.DISCOVER: "Descubrimiento",
    Stage.UNDERSTAND: "Comprensión",
    Stage.PROPOSAL: "Propuesta",
    Stage.NEGOTIATING: "Negociación",
    Stage.CLOSED: "Cerrado",
}


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    SALES_REP = "SALES_REP"
    FINANCE = "FINANCE"
    SALES_OPS = "SALES_OPS"
    PS_MANAGER = "PS_MANAGER"
    DELIVERY_MANAGER = "DELIVERY_MANAGER"


class ApprovalStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    AUTO_APPROVED = "AUTO_APPROVED"


class GateName(str, enum.Enum):
    """The four approval checkpoints of the bid council."""

    FINANCE = "finance"
    SALES_OPS = "salesOps"
    PS = "ps"
    DELIVERY = "delivery"


class BuyingRole(str, enum.Enum):
    CHAMPION = "CHAMPION"
    ECONOMIC_BUYER = "ECONOMIC_BUYER"
    TECHNICAL_EVALUATOR = "TECHNICAL_EVALUATOR"
    USER = "USER"
    BLOCKER = "BLOCKER"
    COACH = "COACH"
    UNKNOWN = "UNKNOWN"


class HealthStatus(str, enum.Enum):
    HEALTHY = "HEALTHY"
    AT_RISK = "AT_RISK"
    CRITICAL = "CRITICAL"
