"""
deal_engine.py — Sales deal value from attached quotes.

A deal's value is the sum of the stored ``total_internal_cost`` of its quotes.
Stored summaries are trusted as historical records and never recomputed;
a quote saved without a summary contributes 0.
"""

from typing import Any, Dict, Sequence

from app.models.quote_schema import StoredQuote


def aggregate_deal_value(quotes: Sequence[StoredQuote]) -> Dict[str, Any]:
    total = 0.0
    per_quote = []
    missing = []
    for quote in quotes:
        cost = quote.summary.total_internal_cost if quote.summary else 0.0
        if quote.summary is None:
            missing.append(quote.id)
        per_quote.append({"quote_id": quote.id, "total_internal_cost": cost})
        total += cost
    return {
        "quote_count": len(quotes),
        "total_internal_cost": total,
        "quotes": per_quote,
        "quotes_without_summary": missing,
    }
