"""
test_staffing_engine.py — Unit tests for teacher / coordinator costing and assignment.

Tests cover:
  - Hourly teachers: rate × teaching hours × workdays
  - Unpriced teachers kept as zero lines
  - Daily coordinators billed per workday, disabled ones excluded
  - Directory assignment freezes rates by value
"""

from app.models.quote_schema import Coordinator, StaffDirectoryEntry, Teacher
from app.services.staffing_engine import (
    aggregate_staff_costs,
    assign_coordinator,
    assign_teacher,
    coordinator_cost,
    teacher_cost,
)


# ===========================================================================
# Class 1: Costing
# ===========================================================================

class TestStaffCosting:

    def test_scenario_a_teacher(self):
        """100 AED/h × 6 h × 5 workdays = 3 000."""
        teacher = Teacher(id="t1", name="Claire", hourly_rate=100.0)
        assert teacher_cost(teacher, 6, 5) == 3000.0

    def test_coordinator_per_workday(self):
        """800 AED/day × 5 workdays = 4 000 (weekend days not billed)."""
        coordinator = Coordinator(id="c1", name="Omar", daily_rate=800.0)
        assert coordinator_cost(coordinator, 5) == 4000.0

    def test_disabled_coordinator_costs_nothing(self):
        coordinator = Coordinator(id="c1", name="Omar", daily_rate=800.0, enabled=False)
        assert coordinator_cost(coordinator, 5) == 0.0

    def test_breakdown_and_totals(self):
        teachers = [
            Teacher(id="t1", name="Claire", hourly_rate=100.0),
            Teacher(id="t2", name="Hugo", hourly_rate=0.0),
        ]
        coordinators = [
            Coordinator(id="c1", name="Omar", daily_rate=800.0),
            Coordinator(id="c2", name="Lina", daily_rate=600.0, enabled=False),
        ]
        result = aggregate_staff_costs(teachers, coordinators, 6, 5)

        assert [(l.name, l.cost) for l in result["breakdown"]] == [
            ("Claire (Teacher)", 3000.0),
            ("Hugo (Teacher)", 0.0),
            ("Omar (Coordinator)", 4000.0),
        ]
        assert result["teacher_total"] == 3000.0
        assert result["coordinator_total"] == 4000.0
        assert result["total"] == 7000.0

    def test_unnamed_entries_fall_back_to_role(self):
        result = aggregate_staff_costs([Teacher(id="t1", hourly_rate=50.0)], [], 2, 1)
        assert result["breakdown"][0].name == "Teacher (Teacher)"

    def test_zero_workdays_zero_cost(self):
        result = aggregate_staff_costs(
            [Teacher(id="t1", name="Claire", hourly_rate=100.0)],
            [Coordinator(id="c1", name="Omar", daily_rate=800.0)],
            6,
            0,
        )
        assert result["total"] == 0.0
        assert len(result["breakdown"]) == 2


# ===========================================================================
# Class 2: Directory assignment
# ===========================================================================

class TestAssignment:

    def test_teacher_rate_always_starts_at_zero(self):
        entry = StaffDirectoryEntry(id="dir-1", name="Claire", hourly_rate=150.0)
        teacher = assign_teacher(entry, entry_id="q-t1")
        assert teacher.id == "q-t1"
        assert teacher.teacher_id == "dir-1"
        assert teacher.hourly_rate == 0.0

    def test_coordinator_copies_directory_rate(self):
        entry = StaffDirectoryEntry(id="dir-2", name="Omar", daily_rate=800.0)
        coordinator = assign_coordinator(entry)
        assert coordinator.staff_id == "dir-2"
        assert coordinator.daily_rate == 800.0
        assert coordinator.enabled is True
        assert coordinator.id

    def test_coordinator_rate_frozen_after_directory_change(self):
        entry = StaffDirectoryEntry(id="dir-2", name="Omar", daily_rate=800.0)
        coordinator = assign_coordinator(entry)
        entry.daily_rate = 1200.0
        assert coordinator.daily_rate == 800.0

    def test_coordinator_without_directory_rate(self):
        coordinator = assign_coordinator(StaffDirectoryEntry(id="dir-3", name="Sam"))
        assert coordinator.daily_rate == 0.0

    def test_generated_ids_are_unique(self):
        entry = StaffDirectoryEntry(id="dir-1", name="Claire")
        assert assign_teacher(entry).id != assign_teacher(entry).id
