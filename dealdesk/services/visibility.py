"""Deal visibility: ownership gate plus smart-search filtering."""

from __future__ import annotations

from collections.abc import Iterable

from dealdesk.auth.rbac import can_view_all_deals
from dealdesk.schemas.deals import Deal
from dealdesk.schemas.users import User
from dealdesk.services.search_query import SearchQuery, parse_search_query

# Parsed but not applied yet: company, owner, tag.
APPLIED_FIELDS = ("country", "stage")


def owned_by_viewer(deals: Iterable[Deal], viewer: User) -> list[Deal]:
    """Restrict deals to the viewer's own unless the role sees everything."""
    if can_view_all_deals(viewer.role):
        return list(deals)
    return [deal for deal in deals if deal.owner_id == viewer.id]


def matches_query(deal: Deal, query: SearchQuery) -> bool:
    country = query.get("country")
    if country and country not in deal.country.lower():
        return False

    stage = query.get("stage")
    if stage and stage not in deal.stage.value.lower():
        return False

    if query.free_text:
        phrase = query.free_text
        return (
            phrase in deal.title.lower()
            or phrase in deal.company.lower()
            or phrase in deal.contact_name.lower()
        )
    return True


def filter_visible_deals(deals: Iterable[Deal], viewer: User, query: str | None = "") -> list[Deal]:
    """Return the deals ``viewer`` may see that match ``query``, in source order."""
    visible = owned_by_viewer(deals, viewer)
    if not query:
        return visible

    parsed = parse_search_query(query)
    return [deal for deal in visible if matches_query(deal, parsed)]
