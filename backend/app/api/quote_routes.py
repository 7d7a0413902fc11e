"""
Seminar Quote API Routes

POST /api/quotes/summary            — recompute the cost & profitability summary
POST /api/quotes/preview            — summary formatted in a preview currency / cost view
POST /api/quotes/print-view         — pricing block and included services of the share / print view
POST /api/quotes/services/resolve   — initialise or re-price service lines for a campus
POST /api/quotes/staff/assign       — quote staffing entries from directory records
POST /api/quotes/deal-value         — sum of stored internal costs for a deal's quotes
GET  /api/quotes/defaults           — editor defaults for a new quote
GET  /api/quotes/share-link         — print-view query string for a currency / rate
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import Field

from app.models.quote_schema import (
    CatalogService,
    Coordinator,
    CostView,
    Currency,
    QuoteModel,
    QuoteService,
    QuoteState,
    QuoteSummary,
    StaffDirectoryEntry,
    StoredQuote,
    Teacher,
)
from app.services.catalog_engine import CatalogEngine
from app.services.currency_engine import (
    UnsupportedCurrencyError,
    build_editor_preview,
    build_print_pricing,
    build_share_query,
    parse_share_params,
)
from app.services.deal_engine import aggregate_deal_value
from app.services.quote_config import DEFAULT_SHARE_LANGUAGE
from app.services.quote_engine import compute_summary, new_quote_state
from app.services.staffing_engine import assign_coordinator, assign_teacher

router = APIRouter(prefix="/api/quotes", tags=["Seminar Quotes"])
logger = logging.getLogger("imeda-quotes.routes")


# ── Pydantic Models ─────────────────────────────────────────────────────────

class ServiceResolveRequest(QuoteModel):
    catalog: List[CatalogService]
    campus_id: Optional[str] = None
    # Existing quote lines to re-price; omitted → initialise from the catalog
    services: Optional[List[QuoteService]] = None


class StaffAssignRequest(QuoteModel):
    teachers: List[StaffDirectoryEntry] = Field(default_factory=list)
    coordinators: List[StaffDirectoryEntry] = Field(default_factory=list)


class StaffAssignResponse(QuoteModel):
    teachers: List[Teacher]
    coordinators: List[Coordinator]


class PrintViewRequest(QuoteModel):
    quote: StoredQuote
    # Orders the included services; omitted → quote order
    catalog: Optional[List[CatalogService]] = None


class DealValueRequest(QuoteModel):
    quotes: List[StoredQuote]


# ── Summary ─────────────────────────────────────────────────────────────────

@router.post("/summary", response_model=QuoteSummary)
async def quote_summary(state: QuoteState):
    """Recompute the summary from scratch for the posted editor state."""
    return compute_summary(state)


@router.post("/preview")
async def quote_preview(
    state: QuoteState,
    currency: Currency = Query(Currency.AED),
    view: CostView = Query(CostView.TOTAL),
):
    """Live editor breakdown in the preview currency."""
    summary = compute_summary(state)
    return {
        "summary": summary.model_dump(by_alias=True, mode="json"),
        "display": build_editor_preview(summary, state.participant_count, currency, view),
    }


@router.get("/defaults", response_model=QuoteState)
async def quote_defaults(with_standard_overheads: bool = False):
    return new_quote_state(with_standard_overheads=with_standard_overheads)


# ── Share / print view ──────────────────────────────────────────────────────

@router.post("/print-view")
async def quote_print_view(req: PrintViewRequest, request: Request):
    """
    Print-view pricing, driven by the ``currency`` and ``rate`` query
    parameters the share dialog put in the URL.
    """
    quote = req.quote
    try:
        params = parse_share_params(request.query_params)
        block = build_print_pricing(quote, params["currency"], params["rate"], req.catalog)
    except UnsupportedCurrencyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if quote.summary is None:
        logger.warning("print view requested for quote without summary", extra={"quote_id": quote.id})
    block["lang"] = params["lang"]
    return block


@router.get("/share-link")
async def quote_share_link(
    quote_id: str,
    currency: Currency = Query(Currency.AED),
    rate: Optional[float] = Query(None, gt=0),
    lang: str = DEFAULT_SHARE_LANGUAGE,
    contact: Optional[str] = None,
):
    query = build_share_query(currency, rate, lang, contact)
    return {"url": f"/dashboard/imeda/quotes/{quote_id}/print?{query}"}


# ── Catalog & staffing ──────────────────────────────────────────────────────

@router.post("/services/resolve", response_model=List[QuoteService])
async def resolve_services(req: ServiceResolveRequest):
    """Initialise service lines from the catalog, or re-price existing ones for a campus."""
    engine = CatalogEngine(req.catalog)
    if req.services is None:
        return engine.initialize_services(req.campus_id)
    return engine.reprice_for_campus(req.services, req.campus_id)


@router.post("/staff/assign", response_model=StaffAssignResponse)
async def assign_staff(req: StaffAssignRequest):
    return StaffAssignResponse(
        teachers=[assign_teacher(entry) for entry in req.teachers],
        coordinators=[assign_coordinator(entry) for entry in req.coordinators],
    )


# ── Deals ───────────────────────────────────────────────────────────────────

@router.post("/deal-value")
async def deal_value(req: DealValueRequest):
    """Deal amount = Σ stored total internal cost of the attached quotes."""
    result = aggregate_deal_value(req.quotes)
    if result["quotes_without_summary"]:
        logger.warning(
            "deal contains quotes without a saved summary",
            extra={"quote_ids": result["quotes_without_summary"]},
        )
    return result
