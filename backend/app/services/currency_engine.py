"""
currency_engine.py — Display-currency presentation of AED quote amounts.

Covers:
  - Editor live preview (AED amount divided by a fixed preview divisor)
  - Share / print view (AED amount multiplied by the rate chosen at share time)
  - EUR bank conversion surcharge (flat 3 %, applied after conversion)
  - Total vs per-participant cost views
  - Share URL query building and parsing
  - Included services on the print view, in catalog order

Formatting is "{CUR} {integer with comma thousands}". Amounts are rounded to
whole units half away from zero, in every view.

Nothing here recomputes costs: inputs are amounts from a QuoteSummary (live or
stored) and plain quote fields.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import urlencode

from app.models.quote_schema import (
    CatalogService,
    CostView,
    Currency,
    QuoteService,
    QuoteSummary,
    StoredQuote,
)
from app.services.catalog_engine import CatalogEngine
from app.services.quote_config import (
    BASE_CURRENCY,
    DEFAULT_SHARE_LANGUAGE,
    EUR_BANK_SURCHARGE_PCT,
    PREVIEW_DIVISORS,
    SHARE_DEFAULT_RATES,
    SUPPORTED_CURRENCIES,
    SURCHARGE_CURRENCY,
)

logger = logging.getLogger("imeda-quotes.currency")


class UnsupportedCurrencyError(ValueError):
    """Raised for a display currency outside AED / USD / EUR."""


def normalise_currency(currency: Union[Currency, str, None]) -> str:
    if currency is None:
        return BASE_CURRENCY
    code = currency.value if isinstance(currency, Currency) else str(currency).strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise UnsupportedCurrencyError(f"Unsupported currency: {currency!r}")
    return code


# ---------------------------------------------------------------------------
# Rounding & formatting
# ---------------------------------------------------------------------------

def round_amount(amount: float) -> int:
    """Round to a whole currency unit, .5 going away from zero."""
    if not math.isfinite(amount):
        return 0
    return int(Decimal(repr(float(amount))).to_integral_value(rounding=ROUND_HALF_UP))


def format_amount(amount: float, currency: Union[Currency, str]) -> str:
    """``format_amount(1234.5, "USD")`` → ``"USD 1,235"``."""
    return f"{normalise_currency(currency)} {round_amount(amount):,}"


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def convert_for_preview(amount_aed: float, currency: Union[Currency, str]) -> float:
    """Editor preview conversion: AED ÷ fixed divisor."""
    return amount_aed / PREVIEW_DIVISORS[normalise_currency(currency)]


def convert_for_share(amount_aed: float, rate: float) -> float:
    """Print view conversion: AED × the rate chosen when the quote was shared."""
    return amount_aed * rate


def default_share_rate(currency: Union[Currency, str]) -> float:
    return SHARE_DEFAULT_RATES[normalise_currency(currency)]


def format_preview(amount_aed: float, currency: Union[Currency, str]) -> str:
    return format_amount(convert_for_preview(amount_aed, currency), currency)


def apply_bank_surcharge(converted_amount: float) -> Dict[str, float]:
    """Surcharge on an already converted amount."""
    fee = converted_amount * EUR_BANK_SURCHARGE_PCT
    return {"fee": fee, "total_with_fee": converted_amount + fee}


# ---------------------------------------------------------------------------
# Editor live preview
# ---------------------------------------------------------------------------

def _view_divisor(view: CostView, participant_count: int) -> Optional[int]:
    if CostView(view) == CostView.PER_PARTICIPANT:
        return participant_count if participant_count > 0 else None
    return 1


def build_editor_preview(
    summary: QuoteSummary,
    participant_count: int,
    currency: Union[Currency, str] = Currency.AED,
    view: Union[CostView, str] = CostView.TOTAL,
) -> Dict[str, Any]:
    """
    Format the live summary for the editor side panel.

    In the per-participant view every amount is divided by the head count
    first; with no participants all per-head amounts show as 0.
    """
    code = normalise_currency(currency)
    divisor = _view_divisor(CostView(view), participant_count)

    def fmt(amount_aed: float) -> str:
        per_view = amount_aed / divisor if divisor else 0.0
        return format_preview(per_view, code)

    def fmt_lines(lines) -> List[Dict[str, str]]:
        return [{"name": line.name, "amount": fmt(line.cost)} for line in lines]

    return {
        "currency": code,
        "view": CostView(view).value,
        "total_internal_cost": fmt(summary.total_internal_cost),
        "cost_per_participant": format_preview(summary.cost_per_participant, code),
        "base_cost": fmt(summary.base_cost),
        "net_profit": fmt(summary.net_profit),
        "service_breakdown": fmt_lines(summary.service_breakdown),
        "staff_breakdown": fmt_lines(summary.staff_breakdown),
        "other_costs_breakdown": fmt_lines(summary.other_costs_breakdown),
    }


# ---------------------------------------------------------------------------
# Share / print view
# ---------------------------------------------------------------------------

def parse_share_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Read currency and rate from print-view query parameters.

    Missing currency means AED at rate 1. A missing, unparsable or
    non-positive rate falls back to the currency's default share rate.
    """
    code = normalise_currency(params.get("currency") or BASE_CURRENCY)
    rate = default_share_rate(code)
    raw_rate = params.get("rate")
    if raw_rate not in (None, ""):
        try:
            parsed = float(raw_rate)
        except (TypeError, ValueError):
            logger.warning("ignoring unparsable share rate", extra={"rate": str(raw_rate)})
        else:
            if math.isfinite(parsed) and parsed > 0:
                rate = parsed
    if code == BASE_CURRENCY:
        rate = 1.0
    return {
        "currency": code,
        "rate": rate,
        "lang": params.get("lang") or DEFAULT_SHARE_LANGUAGE,
    }


def build_share_query(
    currency: Union[Currency, str] = Currency.AED,
    rate: Optional[float] = None,
    lang: str = DEFAULT_SHARE_LANGUAGE,
    contact: Optional[str] = None,
) -> str:
    """Query string for the print view; currency and rate are omitted for AED."""
    code = normalise_currency(currency)
    params: Dict[str, str] = {"lang": lang}
    if code != BASE_CURRENCY:
        params["currency"] = code
        params["rate"] = repr(float(rate if rate is not None else default_share_rate(code)))
    if contact:
        params["contact"] = contact
    return urlencode(params)


def included_services(
    services: Sequence[QuoteService],
    catalog: Optional[Sequence[CatalogService]] = None,
) -> List[Dict[str, Any]]:
    """Enabled service lines for the print view, in catalog order when a catalog is given."""
    enabled = [s for s in services if s.enabled]
    if catalog:
        enabled = CatalogEngine(catalog).sort_by_catalog_order(enabled)
    return [
        {
            "service_id": s.service_id,
            "name": s.name,
            "description": s.description,
            "image_url": s.image_url,
        }
        for s in enabled
    ]


def build_print_pricing(
    quote: StoredQuote,
    currency: Union[Currency, str] = Currency.AED,
    rate: Optional[float] = None,
    catalog: Optional[Sequence[CatalogService]] = None,
) -> Dict[str, Any]:
    """
    Pricing block of the shareable print view.

    Program figures come from the stored summary snapshot; only display
    amounts are derived here. With EUR the total gains a bank conversion fee
    line and the per-person price is shown including the surcharge.
    Service prices are never shown, only which services are included.
    """
    code = normalise_currency(currency)
    conversion_rate = 1.0 if code == BASE_CURRENCY else (rate if rate is not None else default_share_rate(code))

    price = quote.manual_selling_price_per_participant or 0.0
    total_revenue = quote.participant_count * price
    converted_total = convert_for_share(total_revenue, conversion_rate)
    converted_price = convert_for_share(price, conversion_rate)

    summary = quote.summary or QuoteSummary()
    block: Dict[str, Any] = {
        "currency": code,
        "rate": conversion_rate,
        "participant_count": quote.participant_count,
        "calendar_days": summary.calendar_days,
        "total_teaching_hours": summary.total_teaching_hours,
        "total": format_amount(converted_total, code),
        "conversion_fee": None,
        "total_with_fee": None,
        "included_services": included_services(quote.services, catalog),
    }

    if code == SURCHARGE_CURRENCY:
        total_fee = apply_bank_surcharge(converted_total)
        block["conversion_fee"] = format_amount(total_fee["fee"], code)
        block["total_with_fee"] = format_amount(total_fee["total_with_fee"], code)
        converted_price = apply_bank_surcharge(converted_price)["total_with_fee"]

    block["price_per_person"] = format_amount(converted_price, code)
    block["also_available_in"] = [
        format_amount(price * SHARE_DEFAULT_RATES[other], other)
        for other in SUPPORTED_CURRENCIES
        if other != code
    ]
    return block
