"""
Quote data contracts shared by the engines and the HTTP layer.

Attributes are snake_case; every model also accepts (and serialises to) the
camelCase names used by the dashboard and the stored quote documents.
All monetary values are AED.
"""
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.services.quote_config import (
    DEFAULT_PARTICIPANT_COUNT,
    DEFAULT_SERVICE_TYPE,
    DEFAULT_TEACHING_HOURS,
)


class QuoteModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Enumerations ────────────────────────────────────────────────────────────

class TimeBasis(str, Enum):
    """How a service's unit cost scales with the length of the program."""
    ONE_OFF = "OneOff"
    PER_DAY = "PerDay"
    PER_NIGHT = "PerNight"
    PER_WORKDAY = "PerWorkday"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class WorkdayMethod(str, Enum):
    PROPORTIONAL = "proportional"   # round(calendar_days / 7 * active weekdays)
    EXACT = "exact"                 # day-by-day weekday scan


class Currency(str, Enum):
    AED = "AED"
    USD = "USD"
    EUR = "EUR"


class CostView(str, Enum):
    TOTAL = "total"
    PER_PARTICIPANT = "per_participant"


class QuoteStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# ── Line items ──────────────────────────────────────────────────────────────

class CostLine(QuoteModel):
    name: str
    cost: float = 0.0


class PercentageCost(QuoteModel):
    """Overhead line priced as a fraction of base cost (0.10 == 10 %)."""
    name: str
    rate: float = 0.0


class Teacher(QuoteModel):
    id: str
    teacher_id: Optional[str] = None
    name: str = ""
    hourly_rate: float = 0.0


class Coordinator(QuoteModel):
    id: str
    staff_id: Optional[str] = None
    name: str = ""
    daily_rate: float = 0.0
    enabled: bool = True


class QuoteService(QuoteModel):
    service_id: str
    name: str
    description: str = ""
    time_basis: TimeBasis = TimeBasis.ONE_OFF
    cost_price: float = 0.0
    enabled: bool = False
    is_default: bool = False
    # Only meaningful for optional services; None means the full head count
    participant_override: Optional[int] = None
    image_url: Optional[str] = None


def _as_list(value: Any) -> Any:
    # Document stores sometimes persist arrays as {index: item} maps
    if value is None:
        return []
    if isinstance(value, dict):
        return list(value.values())
    return value


# ── Quote ───────────────────────────────────────────────────────────────────

class QuoteState(QuoteModel):
    """Raw editor inputs: everything the summary is derived from."""

    arrival_date: Optional[date] = None
    departure_date: Optional[date] = None
    participant_count: int = Field(DEFAULT_PARTICIPANT_COUNT, ge=0)
    # None → default Monday–Friday; an empty list means no workdays at all
    active_workdays: Optional[List[Weekday]] = None
    workday_method: WorkdayMethod = WorkdayMethod.PROPORTIONAL

    standard_teaching_hours: float = DEFAULT_TEACHING_HOURS
    teachers: List[Teacher] = Field(default_factory=list)
    coordinators: List[Coordinator] = Field(default_factory=list)

    services: List[QuoteService] = Field(default_factory=list)

    other_costs: List[CostLine] = Field(default_factory=list)
    percentage_costs: List[PercentageCost] = Field(default_factory=list)

    manual_selling_price_per_participant: float = 0.0

    quote_name: str = ""
    client_id: Optional[str] = None
    campus_id: Optional[str] = None
    notes: Optional[str] = None

    @field_validator(
        "teachers", "coordinators", "services", "other_costs", "percentage_costs",
        mode="before",
    )
    @classmethod
    def _coerce_collections(cls, value: Any) -> Any:
        return _as_list(value)


class QuoteSummary(QuoteModel):
    """Derived cost breakdown and profitability projection."""

    calendar_days: int = 0
    nights: int = 0
    workdays: int = 0
    total_teaching_hours: float = 0.0

    service_cost_total: float = 0.0
    service_breakdown: List[CostLine] = Field(default_factory=list)

    teacher_cost_total: float = 0.0
    coordinator_cost_total: float = 0.0
    staff_cost_total: float = 0.0
    staff_breakdown: List[CostLine] = Field(default_factory=list)

    other_cost_total: float = 0.0
    other_costs_breakdown: List[CostLine] = Field(default_factory=list)

    base_cost: float = 0.0
    total_internal_cost: float = 0.0
    cost_per_participant: float = 0.0

    manual_selling_price_per_participant: float = 0.0
    total_revenue: float = 0.0
    net_profit: float = 0.0
    profit_margin_percentage: float = 0.0

    # Optional services whose override exceeds the participant count
    override_warnings: List[str] = Field(default_factory=list)


class StoredQuote(QuoteState):
    """A saved quote together with the summary snapshot taken at save time."""

    id: str
    unit_id: str = "imeda"
    status: QuoteStatus = QuoteStatus.DRAFT
    summary: Optional[QuoteSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None


# ── Upstream collaborators (read-only) ──────────────────────────────────────

class CatalogService(QuoteModel):
    id: str
    name: str
    description: str = ""
    time_unit: Optional[str] = None   # catalog label, e.g. "Per Night"
    campus_costs: Dict[str, float] = Field(default_factory=dict)
    service_type: str = Field("", alias="type")
    order: Optional[int] = None
    image_url: Optional[str] = None

    @property
    def is_default(self) -> bool:
        return self.service_type == DEFAULT_SERVICE_TYPE


class StaffDirectoryEntry(QuoteModel):
    id: str
    name: str
    daily_rate: Optional[float] = None
    hourly_rate: Optional[float] = None
