"""Demo users, contacts and deals for a fresh in-memory workspace."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

from dealdesk.core.config import get_config
from dealdesk.models.enums import ApprovalStatus, BuyingRole, HealthStatus, Stage, UserRole
from dealdesk.schemas.deals import (
    ActionItem,
    Approval,
    ApprovalGates,
    Deal,
    LineItem,
    Meddpicc,
    Resource,
)
from dealdesk.schemas.users import Contact, User
from dealdesk.services.currency import ExchangeRateTable
from dealdesk.services.deal_service import DealService
from dealdesk.services.drafting_service import DraftingService
from dealdesk.services.settings_service import SettingsService


def _approved(approver_id: str | None = None, day: int | None = None) -> Approval:
    timestamp = datetime(2023, 10, day, tzinfo=timezone.utc) if day else None
    return Approval(status=ApprovalStatus.APPROVED, approver_id=approver_id, timestamp=timestamp)


def _all_approved() -> ApprovalGates:
    return ApprovalGates(finance=_approved(), sales_ops=_approved(), ps=_approved(), delivery=_approved())


USERS = [
    User(id="u1", name="Alex Sales", email="alex@edvolution.com", role=UserRole.SALES_REP, department="Sales"),
    User(id="u2", name="Sarah Finance", email="sarah@edvolution.com", role=UserRole.FINANCE, department="Finance"),
    User(id="u3", name="Mike Ops", email="mike@edvolution.com", role=UserRole.SALES_OPS, department="Operations"),
    User(id="u4", name="Jessica PS", email="jess@edvolution.com", role=UserRole.PS_MANAGER, department="Professional Services"),
    User(id="u5", name="David Delivery", email="david@edvolution.com", role=UserRole.DELIVERY_MANAGER, department="Delivery"),
    User(id="u6", name="Admin User", email="admin@edvolution.com", role=UserRole.ADMIN, department="IT"),
]

CONTACTS = [
    Contact(
        id="c1", name="John Doe", role="CTO", company="Acme Corp", email="john@acme.com",
        phone="+1 555-0101", location="San Francisco, CA", tags=["Decision Maker", "Technical"],
        buying_role=BuyingRole.ECONOMIC_BUYER, ai_enriched=True,
    ),
    Contact(
        id="c2", name="Sarah Connor", role="VP Engineering", company="Acme Corp", email="sarah@acme.com",
        location="Austin, TX", tags=["Influencer"], buying_role=BuyingRole.TECHNICAL_EVALUATOR,
    ),
    Contact(
        id="c3", name="Jane Smith", role="VP Marketing", company="Globex Inc", email="jane@globex.com",
        phone="+1 555-0202", location="New York, NY", tags=["Budget Holder"],
        buying_role=BuyingRole.CHAMPION, ai_enriched=True,
    ),
    Contact(
        id="c4", name="Harry Green", role="CISO", company="Soylent Corp", email="h.green@soylent.com",
        location="London, UK", tags=["Blocker", "Security"], buying_role=BuyingRole.BLOCKER, ai_enriched=True,
    ),
    Contact(
        id="c5", name="Alice Wesker", role="Procurement Director", company="Umbrella Corp",
        email="alice@umbrella.com", phone="+1 555-6666", tags=["Procurement", "Negotiator"],
        buying_role=BuyingRole.ECONOMIC_BUYER, ai_enriched=True,
    ),
    Contact(
        id="c6", name="Miles Dyson", role="Director of R&D", company="Cyberdyne", email="miles@cyberdyne.com",
        location="Silicon Valley", tags=["Visionary"], buying_role=BuyingRole.COACH,
    ),
]

DEALS = [
    Deal(
        id="1", owner_id="u1", title="Enterprise Cloud Migration", company="Acme Corp",
        country="United States", value=125000, stage=Stage.UNDERSTAND, probability=40,
        contact_name="John Doe", contact_email="john@acme.com", contact_ids=["c1", "c2"],
        meddpicc=Meddpicc(
            metrics="Reduce TCO by 20% ($500k/yr)",
            economic_buyer="John Doe (CTO) has signing authority",
            decision_criteria="Security (SOC2), Latency < 20ms, Hybrid support",
            decision_process="Tech Eval -> Architecture Review -> Board Approval",
            paper_process="Standard MSA, 30 days net",
            identified_pain="Current legacy ERP is crashing during peak loads",
            champion="Sarah Connor (VP Eng) is pushing for us",
            competition="AWS Direct, Azure",
        ),
        description=(
            "The client is undertaking a major digital transformation initiative. Their legacy ERP "
            "system is causing performance bottlenecks and security risks."
        ),
        tags=["Cloud", "Enterprise"], last_contact="2 days ago", days_dormant=2,
        resources=[
            Resource(
                id="r1", type="RECORDING", title="Initial Discovery Call", source="GMEET",
                occurred_on=date(2023, 10, 20), summary="Discussed timeline and security requirements.",
            ),
            Resource(id="r2", type="DOC", title="Technical Requirements v1", source="GDRIVE", occurred_on=date(2023, 10, 21)),
        ],
        ai_next_step="Schedule technical deep dive with architects.",
        pending_actions=[
            ActionItem(id="a1", title="Send architecture diagram", type="DOC", priority="HIGH"),
            ActionItem(id="a2", title="Confirm budget cycle", type="EMAIL", priority="MEDIUM"),
        ],
        line_items=[
            LineItem(id="l1", sku="SRV-ENT-01", name="Enterprise Cloud Server Instance", quantity=5, unit_price=15000),
            LineItem(id="l2", sku="SVC-MIG-01", name="Migration Services (Hours)", quantity=200, unit_price=200),
            LineItem(id="l3", sku="SUP-247-01", name="24/7 Premium Support", quantity=1, unit_price=10000),
        ],
        approvals=ApprovalGates(sales_ops=_approved("u3", 25)),
    ),
    Deal(
        id="2", owner_id="u1", title="Q3 Marketing Automation", company="Globex Inc",
        country="United Kingdom", value=45000, stage=Stage.DISCOVER, probability=20,
        contact_name="Jane Smith", contact_email="jane@globex.com", contact_ids=["c3"],
        meddpicc=Meddpicc(
            metrics="Save 20hrs/week of manual entry",
            economic_buyer="TBD",
            decision_criteria="Integration with Salesforce, Ease of use",
            decision_process="Demo -> Trial -> Purchase",
            paper_process="Credit Card / Online T&C",
            identified_pain="Manual email nurture is error prone",
            champion="Jane Smith",
            competition="HubSpot, Mailchimp",
        ),
        description="Client is frustrated with current manual processes for email marketing.",
        tags=["Marketing", "SaaS"], last_contact="1 week ago", health=HealthStatus.AT_RISK, days_dormant=7,
        ai_next_step="Re-engage Jane with competitor comparison deck.",
        line_items=[
            LineItem(id="l1", sku="SAAS-MKT-PRO", name="Marketing Pro License (Annual)", quantity=1, unit_price=45000, tax=20),
        ],
    ),
    Deal(
        id="3", owner_id="u2", title="Security Audit 2024", company="Soylent Corp",
        country="Spain", value=15000, stage=Stage.PROPOSAL, probability=70,
        contact_name="Harry Green", contact_email="h.green@soylent.com", contact_ids=["c4"],
        meddpicc=Meddpicc(
            metrics="Compliance with ISO 27001", economic_buyer="CFO", decision_criteria="Price, Speed",
            decision_process="Direct Award", paper_process="PO", identified_pain="Audit due next month",
            champion="Harry Green", competition="None",
        ),
        description="Routine annual security audit. Includes penetration testing and compliance reporting.",
        tags=["Security", "Service"], last_contact="Yesterday", days_dormant=1,
        ai_next_step="Follow up on proposal receipt.",
        line_items=[
            LineItem(id="l1", sku="SVC-SEC-AUD", name="Security Audit Package", quantity=1, unit_price=15000, tax=21),
        ],
        approvals=ApprovalGates(
            finance=_approved("u2", 26), sales_ops=_approved("u3", 26), delivery=_approved("u5", 26),
        ),
    ),
    Deal(
        id="4", owner_id="u1", title="500 User License Deal", company="Umbrella Corp",
        country="Germany", value=500000, stage=Stage.NEGOTIATING, probability=90,
        contact_name="Alice Wesker", contact_email="alice@umbrella.com", contact_ids=["c5"],
        meddpicc=Meddpicc(
            metrics="Consolidate 4 vendors into 1", economic_buyer="Board of Directors",
            decision_criteria="Global support, SLA", decision_process="Legal Review",
            paper_process="Custom Contract", identified_pain="Fragmented IT landscape",
            champion="Alice Wesker", competition="Oracle, SAP",
        ),
        description="Large volume license deal for global subsidiaries. Critical strategic account.",
        tags=["License", "Global"], last_contact="4 hours ago",
        ai_next_step="Finalize payment terms contract clause.",
        pending_actions=[ActionItem(id="a5", title="Review redlines from legal", type="TASK", priority="HIGH")],
        line_items=[
            LineItem(id="l1", sku="LIC-ENT-VOL", name="Enterprise Volume License", quantity=500, unit_price=1000, tax=19),
        ],
        approvals=_all_approved(),
    ),
    Deal(
        id="5", owner_id="u3", title="AI Consulting Retainer", company="Cyberdyne",
        country="United States", value=200000, stage=Stage.CLOSED, probability=100,
        contact_name="Miles Dyson", contact_email="miles@cyberdyne.com", contact_ids=["c6"],
        meddpicc=Meddpicc(
            metrics="Develop Skynet V1", economic_buyer="Miles Dyson", decision_criteria="Innovation capability",
            decision_process="Single Signer", paper_process="Completed", identified_pain="Need advanced neural nets",
            champion="Miles Dyson", competition="None",
        ),
        description="Research partnership for advanced AI development.",
        tags=["AI", "Consulting"], last_contact="1 day ago", days_dormant=1,
        ai_next_step="Schedule kickoff meeting.",
        line_items=[
            LineItem(id="l1", sku="SVC-AI-RET", name="AI Research Retainer (Q4)", quantity=1, unit_price=200000),
        ],
        approvals=_all_approved(),
    ),
]


@dataclass
class Workspace:
    deals: DealService
    settings: SettingsService
    contacts: list[Contact]


def build_workspace(drafting: DraftingService | None = None) -> Workspace:
    """Wire the demo data into services sharing one exchange-rate table."""
    rates = ExchangeRateTable(get_config().DEFAULT_EXCHANGE_RATES)
    return Workspace(
        deals=DealService(DEALS, rates, drafting=drafting),
        settings=SettingsService(USERS, rates),
        contacts=list(CONTACTS),
    )
