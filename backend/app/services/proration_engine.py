"""
proration_engine.py — Time-basis proration of a single cost item.

    OneOff      × 1
    PerDay      × calendar_days
    PerNight    × max(calendar_days − 1, 0)
    PerWorkday  × workdays

Participant scaling is applied afterwards by the service aggregator; the two
multipliers are independent.
"""

from typing import Union

from app.models.quote_schema import TimeBasis
from app.services.schedule_engine import calculate_nights


def time_multiplier(time_basis: Union[TimeBasis, str], calendar_days: int, workdays: int) -> int:
    """Return how many units of a cost item the program consumes."""
    basis = TimeBasis(time_basis)
    if basis == TimeBasis.ONE_OFF:
        return 1
    if basis == TimeBasis.PER_DAY:
        return calendar_days
    if basis == TimeBasis.PER_NIGHT:
        return calculate_nights(calendar_days)
    if basis == TimeBasis.PER_WORKDAY:
        return workdays
    raise ValueError(f"Unhandled time basis: {basis!r}")


def prorate(
    unit_price: float,
    time_basis: Union[TimeBasis, str],
    calendar_days: int,
    workdays: int,
) -> float:
    """Unit price × time multiplier, before participant scaling."""
    return float(unit_price) * time_multiplier(time_basis, calendar_days, workdays)
