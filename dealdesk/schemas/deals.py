"""Deal schemas.

Deals are frozen: callers produce an updated copy with ``model_copy`` and hand
the whole object back to the deal service, which replaces it by id.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from dealdesk.models.enums import ApprovalStatus, GateName, HealthStatus, Stage

_GATE_FIELDS: dict[GateName, str] = {
    GateName.FINANCE: "finance",
    GateName.SALES_OPS: "sales_ops",
    GateName.PS: "ps",
    GateName.DELIVERY: "delivery",
}


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    sku: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=255)
    quantity: int = Field(ge=0)
    unit_price: float = Field(ge=0)
    tax: float = Field(default=0, ge=0, le=100)

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price

    @property
    def tax_amount(self) -> float:
        return self.subtotal * self.tax / 100

    @property
    def total(self) -> float:
        return self.subtotal + self.tax_amount


class Meddpicc(BaseModel):
    """Qualification notes. Display context only, never computed over."""

    model_config = ConfigDict(frozen=True)

    metrics: str = ""
    economic_buyer: str = ""
    decision_criteria: str = ""
    decision_process: str = ""
    paper_process: str = ""
    identified_pain: str = ""
    champion: str = ""
    competition: str = ""


class Approval(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ApprovalStatus = ApprovalStatus.PENDING
    approver_id: str | None = None
    timestamp: datetime | None = None
    comments: str | None = None


class ApprovalGates(BaseModel):
    """Exactly four approval gates; there is no open-ended gate map."""

    model_config = ConfigDict(frozen=True)

    finance: Approval = Field(default_factory=Approval)
    sales_ops: Approval = Field(default_factory=Approval)
    ps: Approval = Field(default_factory=Approval)
    delivery: Approval = Field(default_factory=Approval)

    def get(self, gate: GateName) -> Approval:
        return getattr(self, _GATE_FIELDS[GateName(gate)])

    def replace(self, gate: GateName, approval: Approval) -> "ApprovalGates":
        return self.model_copy(update={_GATE_FIELDS[GateName(gate)]: approval})

    def items(self) -> list[tuple[GateName, Approval]]:
        return [(gate, self.get(gate)) for gate in GateName]


class Resource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    title: str
    source: str
    occurred_on: date
    url: str | None = None
    summary: str | None = None


class ActionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    type: str
    priority: str = "MEDIUM"
    due_date: str | None = None


class SalesOrderLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    sales_order_id: str
    company_id: str
    company_name: str
    currency: str
    total_local_currency: float
    status: str = "DRAFT"
    url: str


class Deal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    title: str
    company: str
    country: str = ""
    value: float = Field(ge=0)
    stage: Stage = Stage.DISCOVER
    probability: int = Field(default=0, ge=0, le=100)
    contact_name: str = ""
    contact_email: str = ""
    contact_ids: list[str] = Field(default_factory=list)
    meddpicc: Meddpicc = Field(default_factory=Meddpicc)
    description: str = ""
    weekly_summary: str | None = None
    last_summary_update: date | None = None
    proposal_content: str | None = None
    tags: list[str] = Field(default_factory=list)
    last_contact: str = ""
    resources: list[Resource] = Field(default_factory=list)
    health: HealthStatus = HealthStatus.HEALTHY
    days_dormant: int = Field(default=0, ge=0)
    ai_next_step: str = ""
    pending_actions: list[ActionItem] = Field(default_factory=list)
    line_items: list[LineItem] = Field(default_factory=list)
    sales_order: SalesOrderLink | None = None
    exchange_rate_override: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    approvals: ApprovalGates = Field(default_factory=ApprovalGates)
