"""
schedule_engine.py — Program length and workday counting for seminar quotes.

Covers:
  - Calendar days (inclusive of arrival and departure)
  - Nights
  - Workdays against the quote's active weekday pattern

Workdays are a density estimate by default:

    workdays = round(calendar_days / 7 × active_weekdays)

This is the figure quotes have always been priced on, so it is kept even though
it diverges from a literal weekday count for ranges that are not whole weeks.
The literal count is available as WorkdayMethod.EXACT.
"""

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from app.models.quote_schema import Weekday, WorkdayMethod
from app.services.quote_config import DAYS_PER_WEEK, DEFAULT_ACTIVE_WORKDAYS, WEEKDAY_ORDER

DateLike = Union[date, datetime]


def _as_date(value: Optional[DateLike]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def round_half_up(value: Union[int, float, Decimal]) -> int:
    """Round to the nearest integer, .5 going away from zero."""
    return int(Decimal(str(value)).to_integral_value(rounding=ROUND_HALF_UP))


def normalise_weekdays(active_workdays: Optional[Iterable[Union[Weekday, str]]]) -> set[str]:
    """
    Return the active weekdays as a set of labels.

    None means the pattern was never set and yields Monday–Friday. An empty
    iterable is a deliberate "no workdays" and stays empty. Unknown labels are
    dropped.
    """
    if active_workdays is None:
        return set(DEFAULT_ACTIVE_WORKDAYS)
    labels = set()
    for day in active_workdays:
        label = day.value if isinstance(day, Weekday) else str(day).strip().capitalize()
        if label in WEEKDAY_ORDER:
            labels.add(label)
    return labels


def calculate_calendar_days(
    arrival_date: Optional[DateLike], departure_date: Optional[DateLike]
) -> int:
    """Days in the program, both endpoints included. 0 when a date is missing or reversed."""
    arrival = _as_date(arrival_date)
    departure = _as_date(departure_date)
    if arrival is None or departure is None:
        return 0
    if departure < arrival:
        return 0
    return (departure - arrival).days + 1


def calculate_nights(calendar_days: int) -> int:
    return max(calendar_days - 1, 0)


def count_matching_weekdays(arrival_date: DateLike, departure_date: DateLike, labels: set[str]) -> int:
    """Literal count of days in [arrival, departure] whose weekday is in ``labels``."""
    arrival = _as_date(arrival_date)
    departure = _as_date(departure_date)
    if not labels or departure < arrival:
        return 0
    active_numbers = {WEEKDAY_ORDER.index(label) for label in labels}
    total = 0
    current = arrival
    while current <= departure:
        if current.weekday() in active_numbers:
            total += 1
        current += timedelta(days=1)
    return total


def calculate_workdays(
    arrival_date: Optional[DateLike],
    departure_date: Optional[DateLike],
    active_workdays: Optional[Iterable[Union[Weekday, str]]] = None,
    method: WorkdayMethod = WorkdayMethod.PROPORTIONAL,
) -> int:
    """
    Number of workdays in the program.

    PROPORTIONAL (default) scales calendar days by the share of active weekdays
    and rounds half-up. EXACT walks the range day by day.
    """
    calendar_days = calculate_calendar_days(arrival_date, departure_date)
    labels = normalise_weekdays(active_workdays)
    if calendar_days == 0 or not labels:
        return 0

    if method == WorkdayMethod.EXACT:
        return count_matching_weekdays(arrival_date, departure_date, labels)

    estimate = Decimal(calendar_days * len(labels)) / Decimal(DAYS_PER_WEEK)
    return round_half_up(estimate)


def calculate_schedule(
    arrival_date: Optional[DateLike],
    departure_date: Optional[DateLike],
    active_workdays: Optional[Iterable[Union[Weekday, str]]] = None,
    method: WorkdayMethod = WorkdayMethod.PROPORTIONAL,
) -> dict:
    """Calendar days, nights and workdays in one pass."""
    calendar_days = calculate_calendar_days(arrival_date, departure_date)
    labels = normalise_weekdays(active_workdays)
    return {
        "calendar_days": calendar_days,
        "nights": calculate_nights(calendar_days),
        "workdays": calculate_workdays(arrival_date, departure_date, labels, method),
        "workdays_per_week": len(labels),
    }
