"""Role-based visibility helpers.

Roles are switched freely from the UI; these scopes decide what a viewer is
shown, they are not a security boundary.
"""

from __future__ import annotations

from dealdesk.models.enums import GateName, UserRole

DEALS_READ_ALL = "deals.read.all"

ROLE_SCOPES: dict[UserRole, set[str]] = {
    UserRole.ADMIN: {
        "*",
    },
    UserRole.SALES_REP: {
        "deals.read.own",
        "deals.stage.move",
        "drafts.generate",
        "contacts.read",
    },
    UserRole.FINANCE: {
        DEALS_READ_ALL,
        "approvals.finance",
        "rates.override",
        "contacts.read",
    },
    UserRole.SALES_OPS: {
        DEALS_READ_ALL,
        "approvals.salesOps",
        "deals.stage.move",
        "contacts.read",
    },
    UserRole.PS_MANAGER: {
        DEALS_READ_ALL,
        "approvals.ps",
        "contacts.read",
    },
    UserRole.DELIVERY_MANAGER: {
        DEALS_READ_ALL,
        "approvals.delivery",
        "contacts.read",
    },
}

GATE_OWNER_ROLES: dict[GateName, UserRole] = {
    GateName.FINANCE: UserRole.FINANCE,
    GateName.SALES_OPS: UserRole.SALES_OPS,
    GateName.PS: UserRole.PS_MANAGER,
    GateName.DELIVERY: UserRole.DELIVERY_MANAGER,
}


def get_scopes_for_role(role: UserRole | str) -> set[str]:
    """Return scopes granted to a role."""
    try:
        return ROLE_SCOPES[UserRole(role)]
    except ValueError:
        return set()


def has_scopes(role: UserRole | str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> bool:
    """Check if role includes every required scope."""
    granted = get_scopes_for_role(role)
    if "*" in granted:
        return True
    return set(required_scopes).issubset(granted)


def can_view_all_deals(role: UserRole | str) -> bool:
    return has_scopes(role, [DEALS_READ_ALL])
