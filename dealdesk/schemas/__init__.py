"""Pydantic schemas for the CRM domain."""

from dealdesk.schemas.deals import (
    ActionItem,
    Approval,
    ApprovalGates,
    Deal,
    LineItem,
    Meddpicc,
    Resource,
    SalesOrderLink,
)
from dealdesk.schemas.users import Contact, User

__all__ = [
    "ActionItem",
    "Approval",
    "ApprovalGates",
    "Contact",
    "Deal",
    "LineItem",
    "Meddpicc",
    "Resource",
    "SalesOrderLink",
    "User",
]
