"""
staffing_engine.py — Teacher and coordinator costing for seminar quotes.

Covers:
  - Teachers billed hourly:      hourly_rate × teaching hours per workday × workdays
  - Coordinators billed daily:   daily_rate × workdays (enabled coordinators only)
  - Assignment from the staff directory (rates copied by value, never re-synced)

A teacher whose rate is still 0 stays in the breakdown as an unpriced
placeholder. Disabled coordinators are omitted from breakdown and totals.
"""

import uuid
from typing import Any, Dict, List, Optional, Sequence

from app.models.quote_schema import CostLine, Coordinator, StaffDirectoryEntry, Teacher

TEACHER_LABEL = "Teacher"
COORDINATOR_LABEL = "Coordinator"


def _line_name(name: str, role: str) -> str:
    return f"{name or role} ({role})"


# ---------------------------------------------------------------------------
# Costing
# ---------------------------------------------------------------------------

def teacher_cost(teacher: Teacher, teaching_hours_per_day: float, workdays: int) -> float:
    return teacher.hourly_rate * teaching_hours_per_day * workdays


def coordinator_cost(coordinator: Coordinator, workdays: int) -> float:
    if not coordinator.enabled:
        return 0.0
    return coordinator.daily_rate * workdays


def aggregate_staff_costs(
    teachers: Sequence[Teacher],
    coordinators: Sequence[Coordinator],
    teaching_hours_per_day: float,
    workdays: int,
) -> Dict[str, Any]:
    """
    Price all staffing assignments.

    Returns:
        Dict with ``breakdown`` (teachers first, then enabled coordinators,
        each in assignment order), ``teacher_total``, ``coordinator_total``
        and ``total``.
    """
    breakdown: List[CostLine] = []
    teacher_total = 0.0
    coordinator_total = 0.0

    for teacher in teachers:
        cost = teacher_cost(teacher, teaching_hours_per_day, workdays)
        breakdown.append(CostLine(name=_line_name(teacher.name, TEACHER_LABEL), cost=cost))
        teacher_total += cost

    for coordinator in coordinators:
        if not coordinator.enabled:
            continue
        cost = coordinator_cost(coordinator, workdays)
        breakdown.append(CostLine(name=_line_name(coordinator.name, COORDINATOR_LABEL), cost=cost))
        coordinator_total += cost

    return {
        "breakdown": breakdown,
        "teacher_total": teacher_total,
        "coordinator_total": coordinator_total,
        "total": teacher_total + coordinator_total,
    }


# ---------------------------------------------------------------------------
# Assignment from the staff directory
# ---------------------------------------------------------------------------

def _new_entry_id() -> str:
    return uuid.uuid4().hex


def assign_teacher(entry: StaffDirectoryEntry, entry_id: Optional[str] = None) -> Teacher:
    """
    Add a directory teacher to a quote.

    The hourly rate always starts at 0: teacher rates are negotiated per quote
    and entered by hand, whatever the directory holds.
    """
    return Teacher(
        id=entry_id or _new_entry_id(),
        teacher_id=entry.id,
        name=entry.name,
        hourly_rate=0.0,
    )


def assign_coordinator(entry: StaffDirectoryEntry, entry_id: Optional[str] = None) -> Coordinator:
    """Add a directory coordinator to a quote, freezing the directory daily rate."""
    return Coordinator(
        id=entry_id or _new_entry_id(),
        staff_id=entry.id,
        name=entry.name,
        daily_rate=float(entry.daily_rate or 0.0),
        enabled=True,
    )
