"""
quote_engine.py — Seminar quote summary builder.

Turns the raw editor state (dates, weekday pattern, head count, staffing,
services, other cost lines, manual price) into a QuoteSummary:

    base_cost            = service costs + staff costs
    total_internal_cost  = base_cost + other cost lines
    cost_per_participant = total_internal_cost / participant_count   (0 if no participants)
    net_profit           = price × participant_count − total_internal_cost
    margin %             = (price − cost_per_participant) / price × 100   (0 if unpriced)

The builder is a pure function of its input and is re-run from scratch on
every editor change. It never raises for numeric input: every division is
guarded. Rates and counts are assumed non-negative; the form layer enforces it.

All monetary values are AED.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from app.models.quote_schema import CostLine, PercentageCost, QuoteState, QuoteSummary
from app.services.perf_monitor import timed
from app.services.quote_config import (
    DEFAULT_ACTIVE_WORKDAYS,
    DEFAULT_PARTICIPANT_COUNT,
    DEFAULT_TEACHING_HOURS,
    STANDARD_PERCENTAGE_COSTS,
)
from app.services.schedule_engine import calculate_schedule
from app.services.service_cost_engine import aggregate_service_costs
from app.services.staffing_engine import aggregate_staff_costs

logger = logging.getLogger("imeda-quotes.engine")


# ---------------------------------------------------------------------------
# Other cost lines
# ---------------------------------------------------------------------------

def standard_percentage_costs() -> List[PercentageCost]:
    """Contingency and banking-fee overheads as priced by the finance team."""
    return [PercentageCost(name=name, rate=rate) for name, rate in STANDARD_PERCENTAGE_COSTS]


def build_other_costs(
    fixed_lines: Sequence[CostLine],
    percentage_costs: Sequence[PercentageCost],
    base_cost: float,
) -> List[CostLine]:
    """
    Fixed lines pass through unchanged, followed by percentage lines priced on
    base cost. Percentage lines that come to 0 are omitted.
    """
    lines = [CostLine(name=line.name, cost=line.cost) for line in fixed_lines]
    for item in percentage_costs:
        cost = base_cost * item.rate
        if cost:
            lines.append(CostLine(name=item.name, cost=cost))
    return lines


# ---------------------------------------------------------------------------
# Profitability
# ---------------------------------------------------------------------------

def calculate_profitability(
    total_internal_cost: float,
    participant_count: int,
    selling_price_per_participant: float,
) -> Dict[str, float]:
    """Per-head cost, revenue, net profit and margin with guarded divisions."""
    price = selling_price_per_participant or 0.0
    cost_per_participant = (
        total_internal_cost / participant_count if participant_count > 0 else 0.0
    )
    total_revenue = price * participant_count
    net_profit = total_revenue - total_internal_cost
    margin = (price - cost_per_participant) / price * 100 if price > 0 else 0.0
    return {
        "cost_per_participant": cost_per_participant,
        "total_revenue": total_revenue,
        "net_profit": net_profit,
        "profit_margin_percentage": margin,
    }


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def build_summary(
    service_costs: Dict[str, Any],
    staff_costs: Dict[str, Any],
    other_costs: Sequence[CostLine],
    participant_count: int,
    selling_price_per_participant: float,
    schedule: Optional[Dict[str, int]] = None,
    teaching_hours_per_day: float = 0.0,
) -> QuoteSummary:
    """
    Compose aggregator outputs into a QuoteSummary.

    ``service_costs`` and ``staff_costs`` are the dicts returned by
    aggregate_service_costs / aggregate_staff_costs. ``other_costs`` are final
    cost lines (already priced).
    """
    schedule = schedule or {"calendar_days": 0, "nights": 0, "workdays": 0}

    base_cost = service_costs["total"] + staff_costs["total"]
    other_total = sum(line.cost for line in other_costs)
    total_internal_cost = base_cost + other_total
    profit = calculate_profitability(total_internal_cost, participant_count, selling_price_per_participant)

    return QuoteSummary(
        calendar_days=schedule["calendar_days"],
        nights=schedule["nights"],
        workdays=schedule["workdays"],
        total_teaching_hours=schedule["workdays"] * teaching_hours_per_day,
        service_cost_total=service_costs["total"],
        service_breakdown=list(service_costs["breakdown"]),
        teacher_cost_total=staff_costs.get("teacher_total", 0.0),
        coordinator_cost_total=staff_costs.get("coordinator_total", 0.0),
        staff_cost_total=staff_costs["total"],
        staff_breakdown=list(staff_costs["breakdown"]),
        other_cost_total=other_total,
        other_costs_breakdown=list(other_costs),
        base_cost=base_cost,
        total_internal_cost=total_internal_cost,
        manual_selling_price_per_participant=selling_price_per_participant or 0.0,
        override_warnings=list(service_costs.get("override_warnings", [])),
        **profit,
    )


@timed
def compute_summary(state: QuoteState) -> QuoteSummary:
    """Recompute the full QuoteSummary for an editor state."""
    schedule = calculate_schedule(
        state.arrival_date,
        state.departure_date,
        state.active_workdays,
        state.workday_method,
    )
    service_costs = aggregate_service_costs(
        state.services,
        state.participant_count,
        schedule["calendar_days"],
        schedule["workdays"],
    )
    staff_costs = aggregate_staff_costs(
        state.teachers,
        state.coordinators,
        state.standard_teaching_hours,
        schedule["workdays"],
    )
    base_cost = service_costs["total"] + staff_costs["total"]
    other_costs = build_other_costs(state.other_costs, state.percentage_costs, base_cost)

    summary = build_summary(
        service_costs,
        staff_costs,
        other_costs,
        state.participant_count,
        state.manual_selling_price_per_participant,
        schedule=schedule,
        teaching_hours_per_day=state.standard_teaching_hours,
    )
    logger.debug(
        "quote summary computed",
        extra={
            "workdays": summary.workdays,
            "total_internal_cost": summary.total_internal_cost,
        },
    )
    return summary


def new_quote_state(with_standard_overheads: bool = False) -> QuoteState:
    """Editor defaults for a brand-new quote."""
    return QuoteState(
        participant_count=DEFAULT_PARTICIPANT_COUNT,
        active_workdays=list(DEFAULT_ACTIVE_WORKDAYS),
        standard_teaching_hours=DEFAULT_TEACHING_HOURS,
        percentage_costs=standard_percentage_costs() if with_standard_overheads else [],
    )
