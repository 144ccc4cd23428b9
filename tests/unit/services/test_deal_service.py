from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from dealdesk.core.exceptions import InvalidRateError, NotFoundError
from dealdesk.models.enums import ApprovalStatus, GateName, Stage, UserRole
from dealdesk.schemas.deals import Resource
from dealdesk.schemas.users import Contact
from dealdesk.services.drafting_service import DraftingService

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def test_visible_deals_respects_ownership(deal_service, sales_rep, admin):
    assert [d.id for d in deal_service.visible_deals(sales_rep)] == ["1", "2", "4"]
    assert [d.id for d in deal_service.visible_deals(admin, "stage:proposal")] == ["3"]


def test_board_summary_lists_every_stage_in_order(deal_service, admin):
    summary = deal_service.board_summary(admin)
    assert summary["stage"].tolist() == ["DISCOVER", "UNDERSTAND", "PROPOSAL", "NEGOTIATING", "CLOSED"]
    assert summary["deals"].tolist() == [2, 1, 1, 0, 0]
    assert summary["total_value"].tolist() == [45000.0, 125000.0, 15000.0, 0.0, 0.0]
    assert summary["label"].iloc[0] == "Descubrimiento"


def test_board_summary_with_no_visible_deals(deal_service, role_user):
    summary = deal_service.board_summary(role_user(UserRole.SALES_REP, user_id="nobody"))
    assert summary["deals"].sum() == 0
    assert len(summary) == 5


def test_move_stage_replaces_whole_deal(deal_service, sales_rep):
    before = deal_service.get_deal("2")
    after = deal_service.move_stage("2", Stage.PROPOSAL, sales_rep)
    assert after.stage == Stage.PROPOSAL
    assert before.stage == Stage.DISCOVER
    assert deal_service.get_deal("2") is after
    assert deal_service.audit_log[-1]["event"] == "deal.stage.moved"
    assert deal_service.audit_log[-1]["user_id"] == "u1"


def test_unknown_deal_raises(deal_service, admin):
    with pytest.raises(NotFoundError):
        deal_service.move_stage("missing", Stage.CLOSED, admin)


def test_finance_toggle_with_auto_approval_keeps_stored_pending(deal_service, users):
    finance = users["u2"]
    statuses = deal_service.gate_statuses("1", ps_cost=15000, ops_cost=5000)
    assert statuses[GateName.FINANCE] == ApprovalStatus.AUTO_APPROVED

    deal = deal_service.toggle_approval("1", GateName.FINANCE, finance, ps_cost=15000, ops_cost=5000, now=NOW)
    assert deal.approvals.finance.status == ApprovalStatus.PENDING
    assert deal_service.audit_log == []


def test_sales_ops_toggle_persists_approver_and_timestamp(deal_service, users):
    ops = users["u3"]
    deal = deal_service.toggle_approval("1", GateName.SALES_OPS, ops, now=NOW)
    stored = deal_service.get_deal("1").approvals.sales_ops
    assert deal.approvals.sales_ops is stored
    assert stored.status == ApprovalStatus.APPROVED
    assert stored.approver_id == "u3"
    assert stored.timestamp == NOW
    assert deal_service.audit_log[-1]["gate"] == "salesOps"


def test_raising_costs_removes_finance_overlay(deal_service):
    assert deal_service.gate_statuses("1", 15000, 5000)[GateName.FINANCE] == ApprovalStatus.AUTO_APPROVED
    assert deal_service.gate_statuses("1", 60000, 20000)[GateName.FINANCE] == ApprovalStatus.PENDING


def test_default_cost_inputs_are_used_when_omitted(deal_service):
    margin = deal_service.margin_for("1")
    assert margin.professional_services_cost == 18750
    assert margin.operations_cost == 6250
    assert margin.margin_percent == 45


def test_zero_revenue_deal_has_no_overlay(deal_service, users):
    statuses = deal_service.gate_statuses("4")
    assert statuses[GateName.FINANCE] == ApprovalStatus.PENDING
    deal = deal_service.toggle_approval("4", GateName.FINANCE, users["u2"], now=NOW)
    assert deal.approvals.finance.status == ApprovalStatus.APPROVED


def test_localized_value_uses_entity_and_override(deal_service, admin):
    entity, amount = deal_service.localized_value("3")
    assert entity.currency == "EUR"
    assert amount == pytest.approx(13500)

    deal_service.set_rate_override("3", 0.95, admin)
    _, amount = deal_service.localized_value("3")
    assert amount == pytest.approx(14250)

    deal_service.set_rate_override("3", None, admin)
    _, amount = deal_service.localized_value("3")
    assert amount == pytest.approx(13500)


def test_override_only_shadows_this_deal(deal_service, admin):
    deal_service.set_rate_override("3", 0.5, admin)
    assert deal_service.rates["EUR"] == 0.9
    entity, amount = deal_service.localized_value("4")
    assert entity.currency == "CLP"
    assert amount == 0


@pytest.mark.parametrize("bad", [0, -0.5, float("nan"), "abc"])
def test_invalid_override_is_rejected(deal_service, admin, bad):
    with pytest.raises(InvalidRateError):
        deal_service.set_rate_override("3", bad, admin)
    assert deal_service.get_deal("3").exchange_rate_override is None


def test_create_sales_order_links_entity(deal_service, admin):
    deal = deal_service.create_sales_order("2", admin)
    order = deal.sales_order
    assert order.company_id == "UK-02"
    assert order.currency == "GBP"
    assert order.total_local_currency == pytest.approx(36000)
    assert order.sales_order_id.startswith("SO-")
    assert order.status == "DRAFT"


def test_successful_draft_is_stored_verbatim(deal_service, sales_rep):
    generated = "  # Proposal\n" + "x" * 25000 + "\n"
    deal_service.drafting = DraftingService(generator=lambda prompt: generated)
    deal, draft = deal_service.generate_proposal("1", sales_rep)
    assert draft.succeeded
    assert deal.proposal_content == generated
    assert len(deal.proposal_content) == 25014


def test_overlong_draft_keeps_prior_content(deal_service, sales_rep):
    deal_service.drafting = DraftingService(generator=lambda prompt: "first")
    deal_service.generate_proposal("1", sales_rep)
    deal_service.drafting = DraftingService(generator=lambda prompt: "x" * 50, max_len=10)
    deal, draft = deal_service.generate_proposal("1", sales_rep)
    assert draft.succeeded is False
    assert deal.proposal_content == "first"


def test_failed_draft_leaves_prior_data_untouched(deal_service, sales_rep):
    before = deal_service.get_deal("1")
    deal, draft = deal_service.generate_summary("1", sales_rep)
    assert draft.succeeded is False
    assert draft.text
    assert deal is before
    assert deal.description == before.description


def test_digest_updates_summary_date(deal_service, sales_rep):
    deal_service.drafting = DraftingService(generator=lambda prompt: "• Kickoff held")
    deal, _ = deal_service.generate_digest("2", sales_rep, today=date(2024, 5, 2))
    assert deal.weekly_summary == "• Kickoff held"
    assert deal.last_summary_update == date(2024, 5, 2)


def test_email_draft_is_not_stored(deal_service):
    deal_service.drafting = DraftingService(generator=lambda prompt: "Hi John")
    before = deal_service.get_deal("1")
    draft = deal_service.draft_email("1", "check-in")
    assert draft.text == "Hi John"
    assert deal_service.get_deal("1") is before


def test_primary_contact_change_feeds_free_text_search(deal_service, sales_rep):
    contact = Contact(id="c9", name="Miles Dyson", company="Acme Corp", email="miles@acme.com")
    assert deal_service.visible_deals(sales_rep, "dyson") == []

    deal = deal_service.set_primary_contact("1", contact, sales_rep)
    assert deal.contact_name == "Miles Dyson"
    assert deal.contact_email == "miles@acme.com"
    assert "c9" in deal.contact_ids
    assert [d.id for d in deal_service.visible_deals(sales_rep, "dyson")] == ["1"]
    assert deal_service.audit_log[-1]["event"] == "deal.contact.changed"


def test_add_resource_appends_without_mutating(deal_service, sales_rep):
    before = deal_service.get_deal("2")
    resource = Resource(id="r9", type="DOC", title="Pricing deck", source="UPLOAD", occurred_on=date(2024, 5, 1))
    deal = deal_service.add_resource("2", resource, sales_rep)
    assert deal.resources == [*before.resources, resource]
    assert deal_service.get_deal("2") is deal
    assert before.resources == deal.resources[:-1]
    assert deal_service.audit_log[-1]["resource_id"] == "r9"


def test_gate_sheet_lists_owner_roles_and_overlay(deal_service):
    sheet = deal_service.gate_sheet("1", ps_cost=0, ops_cost=0)
    assert sheet["gate"].tolist() == ["finance", "salesOps", "ps", "delivery"]
    assert sheet["owner_role"].tolist() == ["FINANCE", "SALES_OPS", "PS_MANAGER", "DELIVERY_MANAGER"]
    assert sheet.loc[sheet["gate"] == "finance", "status"].item() == "AUTO_APPROVED"
