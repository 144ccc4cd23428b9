"""Enum vocabulary shared by schemas and services."""

from dealdesk.models.enums import (
    ApprovalStatus,
    BuyingRole,
    GateName,
    HealthStatus,
    Stage,
    UserRole,
)

__all__ = [
    "ApprovalStatus",
    "BuyingRole",
    "GateName",
    "HealthStatus",
    "Stage",
    "UserRole",
]
