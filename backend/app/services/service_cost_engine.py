"""
service_cost_engine.py — Aggregates enabled quote services into a cost breakdown.

For every enabled service:
    line_cost = prorate(cost_price, time_basis) × participant multiplier

Default (mandatory) services always use the full participant count. Optional
services use their participant override when one is set. Disabled services
are left out of the breakdown entirely. Breakdown order follows the order of
the services list (catalog order).
"""

import logging
from typing import Any, Dict, List, Sequence

from app.models.quote_schema import CostLine, QuoteService
from app.services.proration_engine import prorate

logger = logging.getLogger("imeda-quotes.services")


def effective_participants(service: QuoteService, participant_count: int) -> int:
    """Head count a service line is multiplied by."""
    if service.is_default:
        return participant_count
    if service.participant_override is None:
        return participant_count
    return service.participant_override


def find_override_warnings(services: Sequence[QuoteService], participant_count: int) -> List[str]:
    """
    Names of enabled optional services whose override exceeds the head count.

    Over-limit overrides are still priced as entered; this list only feeds the
    editor's warning badge.
    """
    flagged: List[str] = []
    for service in services:
        if not service.enabled or service.is_default:
            continue
        if service.participant_override is not None and service.participant_override > participant_count:
            flagged.append(service.name)
    return flagged


def calculate_service_line(
    service: QuoteService,
    calendar_days: int,
    workdays: int,
    participant_count: int,
) -> float:
    """Cost of one service line; 0 when the service is disabled."""
    if not service.enabled:
        return 0.0
    unit_contribution = prorate(service.cost_price, service.time_basis, calendar_days, workdays)
    return unit_contribution * effective_participants(service, participant_count)


def aggregate_service_costs(
    services: Sequence[QuoteService],
    participant_count: int,
    calendar_days: int,
    workdays: int,
) -> Dict[str, Any]:
    """
    Price every enabled service.

    Returns:
        Dict with ``breakdown`` (list of CostLine, input order), ``total``
        and ``override_warnings``.
    """
    breakdown: List[CostLine] = []
    total = 0.0

    for service in services:
        if not service.enabled:
            continue
        cost = calculate_service_line(service, calendar_days, workdays, participant_count)
        breakdown.append(CostLine(name=service.name, cost=cost))
        total += cost

    warnings = find_override_warnings(services, participant_count)
    for name in warnings:
        logger.warning(
            "participant override above head count",
            extra={"service": name, "participant_count": participant_count},
        )

    return {
        "breakdown": breakdown,
        "total": total,
        "override_warnings": warnings,
    }
