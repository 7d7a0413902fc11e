"""
conftest.py — Shared pytest fixtures for the quote engine test suite.

No database or external service fixtures are defined here.  Engine tests are
pure unit tests; route tests drive the FastAPI app in-process.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``app.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import sys
import os
from datetime import date

import pytest

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any app imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
ALL_DAYS = WEEKDAYS + ["Saturday", "Sunday"]


# ---------------------------------------------------------------------------
# Service lines
# ---------------------------------------------------------------------------

@pytest.fixture
def lunch_service():
    """Default service: 50 AED per participant per workday."""
    from app.models.quote_schema import QuoteService
    return QuoteService(
        service_id="svc-lunch",
        name="Lunch",
        time_basis="PerWorkday",
        cost_price=50.0,
        enabled=True,
        is_default=True,
    )


@pytest.fixture
def excursion_service():
    """Optional one-off service taken by 4 of the participants."""
    from app.models.quote_schema import QuoteService
    return QuoteService(
        service_id="svc-excursion",
        name="Desert Excursion",
        time_basis="OneOff",
        cost_price=20.0,
        enabled=True,
        is_default=False,
        participant_override=4,
    )


@pytest.fixture
def hotel_service():
    """Optional per-night service, disabled until the client asks for it."""
    from app.models.quote_schema import QuoteService
    return QuoteService(
        service_id="svc-hotel",
        name="Hotel",
        time_basis="PerNight",
        cost_price=300.0,
        enabled=False,
        is_default=False,
    )


# ---------------------------------------------------------------------------
# Quote states
# ---------------------------------------------------------------------------

@pytest.fixture
def reference_quote(lunch_service, excursion_service):
    """
    Seven-day program, Mon–Fri pattern, 10 participants, 6 h/day teaching,
    one teacher at 100 AED/h, lunch + excursion, sold at 700 AED per head.

      workdays       = round(7/7 × 5) = 5
      lunch          = 50 × 5 × 10    = 2 500
      excursion      = 20 × 1 × 4     =    80
      teacher        = 100 × 6 × 5    = 3 000
      total internal                  = 5 580
    """
    from app.models.quote_schema import QuoteState, Teacher
    return QuoteState(
        arrival_date=date(2026, 3, 2),
        departure_date=date(2026, 3, 8),
        participant_count=10,
        active_workdays=WEEKDAYS,
        standard_teaching_hours=6,
        teachers=[Teacher(id="t1", name="Claire Martin", hourly_rate=100.0)],
        services=[lunch_service, excursion_service],
        manual_selling_price_per_participant=700.0,
    )


@pytest.fixture
def catalog():
    """Three catalog services across two campuses, deliberately listed out of order."""
    from app.models.quote_schema import CatalogService
    return [
        CatalogService(
            id="svc-hotel",
            name="Hotel",
            time_unit="Per Night",
            campus_costs={"dubai": 320.0, "paris": 410.0},
            type="Optional Service",
            order=3,
        ),
        CatalogService(
            id="svc-lunch",
            name="Lunch",
            time_unit="Per Workday",
            campus_costs={"dubai": 50.0, "default": 45.0},
            type="Default Service",
            order=1,
        ),
        CatalogService(
            id="svc-welcome",
            name="Welcome Kit",
            time_unit="Per Seminar",
            campus_costs={},
            type="Default Service",
            order=2,
        ),
    ]


@pytest.fixture
def client():
    """FastAPI TestClient bound to the full app (middleware included)."""
    from fastapi.testclient import TestClient
    from app.main import app
    return TestClient(app)
