from __future__ import annotations

from dealdesk.models.enums import BuyingRole
from dealdesk.seed_data import CONTACTS, DEALS
from dealdesk.services.contact_service import companies, deals_for_contact, filter_contacts, set_buying_role


def _ids(items):
    return [item.id for item in items]


def test_companies_are_sorted_and_prefixed_with_all():
    assert companies(CONTACTS) == ["All", "Acme Corp", "Cyberdyne", "Globex Inc", "Soylent Corp", "Umbrella Corp"]


def test_text_search_covers_name_email_and_company():
    assert _ids(filter_contacts(CONTACTS, "sarah")) == ["c2"]
    assert _ids(filter_contacts(CONTACTS, "@globex")) == ["c3"]
    assert _ids(filter_contacts(CONTACTS, "ACME")) == ["c1", "c2"]


def test_company_filter_is_exact():
    assert _ids(filter_contacts(CONTACTS, company="Acme Corp")) == ["c1", "c2"]
    assert filter_contacts(CONTACTS, company="Acme") == []
    assert len(filter_contacts(CONTACTS, company="All")) == len(CONTACTS)


def test_deal_filter_keeps_linked_contacts():
    deal = next(d for d in DEALS if d.id == "1")
    assert _ids(filter_contacts(CONTACTS, deal=deal)) == ["c1", "c2"]
    assert _ids(filter_contacts(CONTACTS, "john", deal=deal)) == ["c1"]


def test_deals_for_contact():
    assert _ids(deals_for_contact(DEALS, "c5")) == ["4"]
    assert deals_for_contact(DEALS, "nobody") == []


def test_set_buying_role_returns_new_contact():
    original = CONTACTS[1]
    updated = set_buying_role(original, BuyingRole.CHAMPION)
    assert updated.buying_role == BuyingRole.CHAMPION
    assert original.buying_role == BuyingRole.TECHNICAL_EVALUATOR
