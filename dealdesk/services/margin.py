"""Bid council margin calculation and the bid model sheet."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

import pandas as pd

from dealdesk.core.exceptions import ValidationError, ZeroRevenueError

LICENSE_COST_RATIO = 0.35
AUTO_APPROVAL_MARGIN_PERCENT = 30
PS_COST_RATIO = 0.15
OPS_COST_RATIO = 0.05

SHEET_COLUMNS = ["Line Item", "Source", "Amount ($)", "Notes", "Owner"]


def round_half_up(value: float) -> int:
    """Round halves towards +inf instead of to the nearest even integer."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class MarginBreakdown:
    revenue: float
    license_cost: int
    professional_services_cost: float
    operations_cost: float
    total_cost: float
    gross_margin: float
    margin_percent: int
    auto_approvable: bool


def _require_amount(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number.")
    if value < 0:
        raise ValidationError(f"{name} must be >= 0.")
    return value


def compute_margin(
    revenue: float,
    professional_services_cost: float,
    operations_cost: float,
) -> MarginBreakdown:
    """Cost breakdown and auto-approval signal for a deal's bid council review.

    Auto-approval requires a margin strictly above 30%. Raises
    ``ZeroRevenueError`` when there is no revenue to take a margin of.
    """
    _require_amount("revenue", revenue)
    _require_amount("professional_services_cost", professional_services_cost)
    _require_amount("operations_cost", operations_cost)
    if revenue == 0:
        raise ZeroRevenueError("Margin percentage is undefined for a deal with zero revenue.")

    license_cost = round_half_up(revenue * LICENSE_COST_RATIO)
    total_cost = license_cost + professional_services_cost + operations_cost
    gross_margin = revenue - total_cost
    margin_percent = round_half_up(gross_margin / revenue * 100)
    return MarginBreakdown(
        revenue=revenue,
        license_cost=license_cost,
        professional_services_cost=professional_services_cost,
        operations_cost=operations_cost,
        total_cost=total_cost,
        gross_margin=gross_margin,
        margin_percent=margin_percent,
        auto_approvable=margin_percent > AUTO_APPROVAL_MARGIN_PERCENT,
    )


def default_cost_estimates(revenue: float) -> tuple[int, int]:
    """Initial PS and ops cost inputs offered for a deal of ``revenue``."""
    return round_half_up(revenue * PS_COST_RATIO), round_half_up(revenue * OPS_COST_RATIO)


def bid_model_sheet(breakdown: MarginBreakdown) -> pd.DataFrame:
    """Spreadsheet view of the breakdown; costs are shown as negative amounts."""
    rows = [
        ["Total Revenue", "ERP Sales Order", breakdown.revenue, "Booked value", "Sales"],
        ["Cost of Goods (Software)", "System (35%)", -breakdown.license_cost, "Standard licensing", "Finance"],
        ["Prof. Services Cost", "Input", -breakdown.professional_services_cost, "Implementation labor", "PS Dept"],
        ["Sales Ops Cost", "Input", -breakdown.operations_cost, "Pre-sales eng", "Ops"],
        ["NET PROFIT", "Calculated", breakdown.gross_margin, "EBITDA Contribution", "Finance"],
    ]
    return pd.DataFrame(rows, columns=SHEET_COLUMNS)
