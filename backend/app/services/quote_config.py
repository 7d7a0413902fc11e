"""
Quote engine configuration: single source of truth for scheduling defaults,
currency tables and overhead percentages.

Import from here in all engines and routes rather than hardcoding values.
Rate constants can be overridden from the environment at import time.
"""
from __future__ import annotations

import os


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ── Scheduling defaults ────────────────────────────────────────────────────────

# Weekday labels in calendar order (Python date.weekday(): Monday == 0).
WEEKDAY_ORDER: list[str] = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

# Used when a quote has never had its active weekdays set.
DEFAULT_ACTIVE_WORKDAYS: list[str] = WEEKDAY_ORDER[:5]

DAYS_PER_WEEK: int = 7

# Editor defaults for a brand-new quote
DEFAULT_PARTICIPANT_COUNT: int = 2
DEFAULT_TEACHING_HOURS: float = 6.0


# ── Catalog ────────────────────────────────────────────────────────────────────

# Catalog time-unit labels → engine time basis
CATALOG_TIME_UNITS: dict[str, str] = {
    "Per Seminar": "OneOff",
    "Per Day":     "PerDay",
    "Per Night":   "PerNight",
    "Per Workday": "PerWorkday",
}

DEFAULT_SERVICE_TYPE: str = "Default Service"

# Campus-cost key consulted when the selected campus has no price of its own
FALLBACK_CAMPUS_KEY: str = "default"

# Sort position for catalog entries that carry no explicit order
UNORDERED_CATALOG_POSITION: int = 999


# ── Overheads ──────────────────────────────────────────────────────────────────

# (label, fraction of base cost), appended to other costs when a quote opts in
STANDARD_PERCENTAGE_COSTS: list[tuple[str, float]] = [
    ("Contingency (10%)", 0.10),
    ("Banking & Wire Fees (3%)", 0.03),
]


# ── Currency ───────────────────────────────────────────────────────────────────

BASE_CURRENCY: str = "AED"
SUPPORTED_CURRENCIES: list[str] = ["AED", "USD", "EUR"]

# Editor live preview: AED amount is DIVIDED by these
PREVIEW_DIVISORS: dict[str, float] = {
    "AED": 1.0,
    "USD": _env_float("QUOTE_USD_PREVIEW_DIVISOR", 3.67),
    "EUR": _env_float("QUOTE_EUR_PREVIEW_DIVISOR", 4.0),
}

# Share / print view: AED amount is MULTIPLIED by these unless the URL carries a rate
SHARE_DEFAULT_RATES: dict[str, float] = {
    "AED": 1.0,
    "USD": _env_float("QUOTE_USD_SHARE_RATE", 0.27),
    "EUR": _env_float("QUOTE_EUR_SHARE_RATE", 0.230),
}

# Bank conversion surcharge shown on EUR print views (applied after conversion)
SURCHARGE_CURRENCY: str = "EUR"
EUR_BANK_SURCHARGE_PCT: float = _env_float("QUOTE_EUR_SURCHARGE_PCT", 0.03)

DEFAULT_SHARE_LANGUAGE: str = "fr"
