"""Contacts directory filters and the deal/contact join."""

from __future__ import annotations

from collections.abc import Iterable

from dealdesk.models.enums import BuyingRole
from dealdesk.schemas.deals import Deal
from dealdesk.schemas.users import Contact

ALL_COMPANIES = "All"


def companies(contacts: Iterable[Contact]) -> list[str]:
    return [ALL_COMPANIES] + sorted({c.company for c in contacts if c.company})


def filter_contacts(
    contacts: Iterable[Contact],
    query: str = "",
    company: str = ALL_COMPANIES,
    deal: Deal | None = None,
) -> list[Contact]:
    """Filter by name/email/company text, exact company, and deal membership."""
    needle = query.strip().lower()
    result = []
    for contact in contacts:
        if deal is not None and contact.id not in deal.contact_ids:
            continue
        if company and company != ALL_COMPANIES and contact.company != company:
            continue
        if needle and not any(
            needle in field.lower() for field in (contact.name, contact.email, contact.company)
        ):
            continue
        result.append(contact)
    return result


def deals_for_contact(deals: Iterable[Deal], contact_id: str) -> list[Deal]:
    return [deal for deal in deals if contact_id in deal.contact_ids]


def set_buying_role(contact: Contact, role: BuyingRole) -> Contact:
    return contact.model_copy(update={"buying_role": BuyingRole(role)})
