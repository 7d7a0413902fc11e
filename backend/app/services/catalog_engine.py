from typing import Dict, List, Optional, Sequence
import logging

from app.models.quote_schema import CatalogService, QuoteService, TimeBasis
from app.services.quote_config import (
    CATALOG_TIME_UNITS,
    FALLBACK_CAMPUS_KEY,
    UNORDERED_CATALOG_POSITION,
)

logger = logging.getLogger("imeda-quotes.catalog")


def map_time_unit(time_unit: Optional[str]) -> TimeBasis:
    """Catalog label ("Per Night", ...) → TimeBasis. Unknown labels are one-off."""
    return TimeBasis(CATALOG_TIME_UNITS.get(time_unit or "", TimeBasis.ONE_OFF.value))


def resolve_campus_cost(service: CatalogService, campus_id: Optional[str]) -> float:
    """
    Unit cost of a catalog service at a campus.

    Falls back to the ``default`` price, then to the first listed campus
    price, then to 0.
    """
    costs = service.campus_costs or {}
    if campus_id and campus_id in costs:
        return float(costs[campus_id])
    if FALLBACK_CAMPUS_KEY in costs:
        return float(costs[FALLBACK_CAMPUS_KEY])
    for cost in costs.values():
        return float(cost)
    return 0.0


class CatalogEngine:
    """
    Joins the service catalog onto a quote's service lines.

    Catalog prices are read once, when a quote is initialised or its campus
    changes; the quote then owns its copy of each price.
    """

    def __init__(self, catalog: Sequence[CatalogService]):
        self.catalog: List[CatalogService] = sorted(
            catalog,
            key=lambda s: s.order if s.order is not None else UNORDERED_CATALOG_POSITION,
        )
        self._by_id: Dict[str, CatalogService] = {s.id: s for s in self.catalog}

    def get(self, service_id: str) -> Optional[CatalogService]:
        return self._by_id.get(service_id)

    def initialize_services(self, campus_id: Optional[str] = None) -> List[QuoteService]:
        """One quote line per catalog entry; default services start enabled."""
        return [
            QuoteService(
                service_id=entry.id,
                name=entry.name,
                description=entry.description,
                time_basis=map_time_unit(entry.time_unit),
                cost_price=resolve_campus_cost(entry, campus_id),
                enabled=entry.is_default,
                is_default=entry.is_default,
                image_url=entry.image_url,
            )
            for entry in self.catalog
        ]

    def reprice_for_campus(
        self, services: Sequence[QuoteService], campus_id: Optional[str]
    ) -> List[QuoteService]:
        """
        Replace each line's cost price with the campus price.

        Everything else on the line (enabled flag, overrides) is kept. Lines
        whose catalog entry no longer exists keep their current price.
        """
        repriced: List[QuoteService] = []
        unknown: List[str] = []
        for service in services:
            entry = self.get(service.service_id)
            if entry is None:
                unknown.append(service.service_id)
                repriced.append(service.model_copy())
                continue
            repriced.append(
                service.model_copy(update={"cost_price": resolve_campus_cost(entry, campus_id)})
            )
        if unknown:
            logger.warning(
                "services missing from catalog kept their price",
                extra={"service_ids": unknown, "campus_id": campus_id},
            )
        return repriced

    def sort_by_catalog_order(self, services: Sequence[QuoteService]) -> List[QuoteService]:
        """Catalog order, services missing from the catalog last."""
        position = {entry.id: idx for idx, entry in enumerate(self.catalog)}
        return sorted(
            services,
            key=lambda s: position.get(s.service_id, len(position)),
        )
