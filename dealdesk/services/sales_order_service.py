"""Mock ERP sales-order creation.

No ERP is contacted: the order number is generated locally and the link
points at the configured ERP base URL.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from dealdesk.core.config import get_config
from dealdesk.schemas.deals import Deal, LineItem, SalesOrderLink
from dealdesk.services.currency import convert
from dealdesk.services.entity_resolver import EntityDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    tax: float
    total: float


def order_totals(line_items: Iterable[LineItem]) -> OrderTotals:
    """Sum order lines in USD; each line's tax is a percentage of its subtotal."""
    subtotal = 0.0
    tax = 0.0
    for item in line_items:
        subtotal += item.subtotal
        tax += item.tax_amount
    return OrderTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def create_sales_order(
    deal: Deal,
    entity: EntityDescriptor,
    rates: Mapping[str, object],
    rng: random.Random | None = None,
) -> SalesOrderLink:
    """Create a draft sales order for ``deal`` in ``entity``'s ledger."""
    rng = rng or random.Random()
    order = SalesOrderLink(
        sales_order_id=f"SO-{rng.randint(10000, 99999)}",
        company_id=entity.id,
        company_name=entity.name,
        currency=entity.currency,
        total_local_currency=convert(deal.value, entity.currency, rates, deal.exchange_rate_override),
        status="DRAFT",
        url=get_config().ERP_BASE_URL,
    )
    logger.info(
        "erp.sales_order.created",
        extra={"event": "erp.sales_order.created", "deal_id": deal.id},
    )
    return order
