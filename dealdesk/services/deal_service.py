"""In-process deal workspace: board, bid council approvals, currency and drafts."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Any

import pandas as pd

from dealdesk.auth.rbac import GATE_OWNER_ROLES
from dealdesk.core.exceptions import NotFoundError, ZeroRevenueError
from dealdesk.core.logging import LogContext, build_log_event
from dealdesk.models.enums import ApprovalStatus, GateName, Stage
from dealdesk.schemas.deals import Deal, Resource
from dealdesk.schemas.users import Contact, User
from dealdesk.services.approval_gates import effective_gates, toggle_gate
from dealdesk.services.currency import ExchangeRateTable, convert, validate_rate
from dealdesk.services.drafting_service import Draft, DraftingService
from dealdesk.services.entity_resolver import EntityDescriptor, resolve_entity
from dealdesk.services.margin import MarginBreakdown, compute_margin, default_cost_estimates
from dealdesk.services.sales_order_service import create_sales_order
from dealdesk.services.visibility import filter_visible_deals
from dealdesk.utils.frames import models_to_df

logger = logging.getLogger(__name__)


class DealService:
    """Service over the externally owned deal list.

    Deals are never mutated in place; every change replaces the whole
    record by id and appends a structured event to ``audit_log``.
    """

    def __init__(
        self,
        deals: Iterable[Deal],
        rates: ExchangeRateTable,
        drafting: DraftingService | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._deals: list[Deal] = list(deals)
        self.rates = rates
        self.drafting = drafting or DraftingService()
        self.rng = rng or random.Random()
        self.audit_log: list[dict[str, Any]] = []

    @property
    def deals(self) -> list[Deal]:
        return list(self._deals)

    def get_deal(self, deal_id: str) -> Deal:
        for deal in self._deals:
            if deal.id == deal_id:
                return deal
        raise NotFoundError(f"Deal {deal_id} not found.")

    def replace_deal(self, deal: Deal) -> Deal:
        self.get_deal(deal.id)
        self._deals = [deal if d.id == deal.id else d for d in self._deals]
        return deal

    def _record(self, event: str, actor: User | None, deal_id: str, **fields: Any) -> None:
        context = LogContext(
            user_id=actor.id if actor else None,
            role=actor.role.value if actor else None,
            deal_id=deal_id,
        )
        self.audit_log.append(build_log_event(event, context, **fields))
        logger.info(event, extra={"event": event, "deal_id": deal_id, "user_id": context.user_id})

    # Board

    def visible_deals(self, viewer: User, query: str = "") -> list[Deal]:
        return filter_visible_deals(self._deals, viewer, query)

    def board_summary(self, viewer: User, query: str = "") -> pd.DataFrame:
        """One row per stage, in board order: deal count and total USD value."""
        stages = Stage.ordered()
        order = [stage.value for stage in stages]
        df = models_to_df(self.visible_deals(viewer, query), columns=["id", "stage", "value"])
        if df.empty:
            counts = pd.Series(0, index=order)
            totals = pd.Series(0.0, index=order)
        else:
            grouped = df.groupby("stage")
            counts = grouped["id"].count().reindex(order, fill_value=0)
            totals = grouped["value"].sum().reindex(order, fill_value=0)
        return pd.DataFrame(
            {
                "stage": order,
                "label": [stage.label for stage in stages],
                "deals": counts.astype(int).tolist(),
                "total_value": totals.astype(float).tolist(),
            }
        )

    def move_stage(self, deal_id: str, stage: Stage, actor: User) -> Deal:
        deal = self.get_deal(deal_id)
        new_stage = Stage(stage)
        updated = self.replace_deal(deal.model_copy(update={"stage": new_stage}))
        self._record("deal.stage.moved", actor, deal_id, from_stage=deal.stage.value, to_stage=new_stage.value)
        return updated

    # Workspace

    def set_primary_contact(self, deal_id: str, contact: Contact, actor: User) -> Deal:
        """Make ``contact`` the deal's primary contact and link it to the deal."""
        deal = self.get_deal(deal_id)
        contact_ids = deal.contact_ids if contact.id in deal.contact_ids else [*deal.contact_ids, contact.id]
        update = {"contact_name": contact.name, "contact_email": contact.email, "contact_ids": contact_ids}
        updated = self.replace_deal(deal.model_copy(update=update))
        self._record("deal.contact.changed", actor, deal_id, contact_id=contact.id)
        return updated

    def add_resource(self, deal_id: str, resource: Resource, actor: User) -> Deal:
        deal = self.get_deal(deal_id)
        updated = self.replace_deal(deal.model_copy(update={"resources": [*deal.resources, resource]}))
        self._record("deal.resource.added", actor, deal_id, resource_id=resource.id, resource_type=resource.type)
        return updated

    # Bid council

    def margin_for(
        self,
        deal_id: str,
        ps_cost: float | None = None,
        ops_cost: float | None = None,
    ) -> MarginBreakdown:
        deal = self.get_deal(deal_id)
        default_ps, default_ops = default_cost_estimates(deal.value)
        return compute_margin(
            deal.value,
            default_ps if ps_cost is None else ps_cost,
            default_ops if ops_cost is None else ops_cost,
        )

    def _margin_or_none(self, deal_id: str, ps_cost: float | None, ops_cost: float | None) -> MarginBreakdown | None:
        try:
            return self.margin_for(deal_id, ps_cost, ops_cost)
        except ZeroRevenueError:
            logger.warning(
                "deal.margin.zero_revenue",
                extra={"event": "deal.margin.zero_revenue", "deal_id": deal_id},
            )
            return None

    def gate_statuses(
        self,
        deal_id: str,
        ps_cost: float | None = None,
        ops_cost: float | None = None,
    ) -> dict[GateName, ApprovalStatus]:
        """Gate statuses as displayed, including the finance auto-approval overlay."""
        deal = self.get_deal(deal_id)
        return effective_gates(deal.approvals, self._margin_or_none(deal_id, ps_cost, ops_cost))

    def gate_sheet(
        self,
        deal_id: str,
        ps_cost: float | None = None,
        ops_cost: float | None = None,
    ) -> pd.DataFrame:
        """One row per gate: owning role, displayed status and approver."""
        deal = self.get_deal(deal_id)
        statuses = self.gate_statuses(deal_id, ps_cost, ops_cost)
        rows = [
            {
                "gate": gate.value,
                "owner_role": GATE_OWNER_ROLES[gate].value,
                "status": statuses[gate].value,
                "approver_id": approval.approver_id,
            }
            for gate, approval in deal.approvals.items()
        ]
        return pd.DataFrame(rows, columns=["gate", "owner_role", "status", "approver_id"])

    def toggle_approval(
        self,
        deal_id: str,
        gate: GateName,
        actor: User,
        ps_cost: float | None = None,
        ops_cost: float | None = None,
        now: datetime | None = None,
    ) -> Deal:
        deal = self.get_deal(deal_id)
        margin = self._margin_or_none(deal_id, ps_cost, ops_cost)
        approvals = toggle_gate(deal.approvals, GateName(gate), actor.id, margin=margin, now=now)
        if approvals is deal.approvals:
            return deal

        updated = self.replace_deal(deal.model_copy(update={"approvals": approvals}))
        self._record(
            "deal.approval.toggled",
            actor,
            deal_id,
            gate=GateName(gate).value,
            status=approvals.get(gate).status.value,
        )
        return updated

    # Currency and ERP

    def set_rate_override(self, deal_id: str, rate: object | None, actor: User) -> Deal:
        deal = self.get_deal(deal_id)
        override = None if rate is None else validate_rate(rate)
        updated = self.replace_deal(deal.model_copy(update={"exchange_rate_override": override}))
        self._record("deal.rate_override.set", actor, deal_id, rate=override)
        return updated

    def localized_value(self, deal_id: str) -> tuple[EntityDescriptor, float]:
        deal = self.get_deal(deal_id)
        entity = resolve_entity(deal.country)
        amount = convert(deal.value, entity.currency, self.rates, deal.exchange_rate_override)
        return entity, amount

    def create_sales_order(self, deal_id: str, actor: User) -> Deal:
        deal = self.get_deal(deal_id)
        order = create_sales_order(deal, resolve_entity(deal.country), self.rates, rng=self.rng)
        updated = self.replace_deal(deal.model_copy(update={"sales_order": order}))
        self._record("deal.sales_order.created", actor, deal_id, sales_order_id=order.sales_order_id)
        return updated

    # Drafts

    def _store_draft(self, deal_id: str, draft: Draft, actor: User, update: dict[str, Any]) -> Deal:
        deal = self.get_deal(deal_id)
        if not draft.succeeded:
            return deal
        updated = self.replace_deal(deal.model_copy(update=update))
        self._record("deal.draft.stored", actor, deal_id, kind=draft.kind)
        return updated

    def generate_proposal(self, deal_id: str, actor: User) -> tuple[Deal, Draft]:
        draft = self.drafting.proposal(self.get_deal(deal_id))
        return self._store_draft(deal_id, draft, actor, {"proposal_content": draft.text}), draft

    def generate_summary(self, deal_id: str, actor: User) -> tuple[Deal, Draft]:
        draft = self.drafting.executive_summary(self.get_deal(deal_id))
        return self._store_draft(deal_id, draft, actor, {"description": draft.text}), draft

    def generate_digest(self, deal_id: str, actor: User, today: date | None = None) -> tuple[Deal, Draft]:
        draft = self.drafting.weekly_digest(self.get_deal(deal_id))
        update = {
            "weekly_summary": draft.text,
            "last_summary_update": today or datetime.now(timezone.utc).date(),
        }
        return self._store_draft(deal_id, draft, actor, update), draft

    def draft_email(self, deal_id: str, kind: str) -> Draft:
        return self.drafting.follow_up_email(self.get_deal(deal_id), kind)
