"""
test_schedule_engine.py — Unit tests for calendar day / night / workday counting.

Tests cover:
  - Inclusive calendar days, missing and reversed dates
  - Proportional workday estimate and its rounding
  - Empty / full / default weekday patterns
  - Exact weekday scan (opt-in method)
"""

from datetime import date, datetime

import pytest

from app.models.quote_schema import Weekday, WorkdayMethod
from app.services.schedule_engine import (
    calculate_calendar_days,
    calculate_nights,
    calculate_schedule,
    calculate_workdays,
    count_matching_weekdays,
    normalise_weekdays,
    round_half_up,
)

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
ALL_DAYS = WEEKDAYS + ["Saturday", "Sunday"]


# ===========================================================================
# Class 1: Calendar days & nights
# ===========================================================================

class TestCalendarDays:

    def test_inclusive_of_both_endpoints(self):
        """2 Mar → 8 Mar is 7 calendar days, not 6."""
        assert calculate_calendar_days(date(2026, 3, 2), date(2026, 3, 8)) == 7

    def test_same_day_program_is_one_day(self):
        assert calculate_calendar_days(date(2026, 3, 2), date(2026, 3, 2)) == 1

    @pytest.mark.parametrize("arrival, departure", [
        (None, date(2026, 3, 8)),
        (date(2026, 3, 2), None),
        (None, None),
    ])
    def test_missing_date_gives_zero(self, arrival, departure):
        assert calculate_calendar_days(arrival, departure) == 0

    def test_departure_before_arrival_clamps_to_zero(self):
        assert calculate_calendar_days(date(2026, 3, 8), date(2026, 3, 2)) == 0

    def test_datetimes_compare_by_calendar_date(self):
        """Times of day are ignored; late arrival + early departure still spans 3 days."""
        arrival = datetime(2026, 3, 2, 23, 30)
        departure = datetime(2026, 3, 4, 0, 15)
        assert calculate_calendar_days(arrival, departure) == 3

    def test_range_across_month_end(self):
        assert calculate_calendar_days(date(2026, 1, 30), date(2026, 2, 2)) == 4

    @pytest.mark.parametrize("days, nights", [(0, 0), (1, 0), (2, 1), (7, 6)])
    def test_nights(self, days, nights):
        assert calculate_nights(days) == nights


# ===========================================================================
# Class 2: Proportional workdays
# ===========================================================================

class TestProportionalWorkdays:

    def test_one_week_five_day_pattern(self):
        """round(7 / 7 × 5) = 5."""
        assert calculate_workdays(date(2026, 3, 2), date(2026, 3, 8), WEEKDAYS) == 5

    def test_all_seven_days_equals_calendar_days(self):
        for span in range(0, 40):
            arrival = date(2026, 3, 1)
            departure = date.fromordinal(arrival.toordinal() + span)
            days = calculate_calendar_days(arrival, departure)
            assert calculate_workdays(arrival, departure, ALL_DAYS) == days

    def test_empty_pattern_gives_zero_workdays(self):
        assert calculate_workdays(date(2026, 3, 2), date(2026, 4, 30), []) == 0

    def test_unset_pattern_defaults_to_weekdays(self):
        """None means "never set" → Mon–Fri → 14 days × 5/7 = 10."""
        assert calculate_workdays(date(2026, 3, 2), date(2026, 3, 15), None) == 10

    def test_estimate_is_density_not_weekday_scan(self):
        """
        Sat 7 Mar → Sun 8 Mar contains no weekday at all, yet the estimate is
        round(2 / 7 × 5) = round(1.43) = 1.
        """
        arrival, departure = date(2026, 3, 7), date(2026, 3, 8)
        assert calculate_workdays(arrival, departure, WEEKDAYS) == 1
        assert calculate_workdays(arrival, departure, WEEKDAYS, WorkdayMethod.EXACT) == 0

    def test_rounds_up_above_half(self):
        """10 days × 5 / 7 = 7.14 → 7;  11 days × 5 / 7 = 7.86 → 8."""
        assert calculate_workdays(date(2026, 3, 1), date(2026, 3, 10), WEEKDAYS) == 7
        assert calculate_workdays(date(2026, 3, 1), date(2026, 3, 11), WEEKDAYS) == 8

    def test_reversed_dates_give_zero_workdays(self):
        assert calculate_workdays(date(2026, 3, 8), date(2026, 3, 2), ALL_DAYS) == 0

    def test_duplicate_labels_count_once(self):
        days = WEEKDAYS + ["Monday", "monday"]
        assert calculate_workdays(date(2026, 3, 2), date(2026, 3, 8), days) == 5

    def test_accepts_enum_members(self):
        days = [Weekday.SATURDAY, Weekday.SUNDAY]
        assert calculate_workdays(date(2026, 3, 2), date(2026, 3, 15), days) == 4


# ===========================================================================
# Class 3: Exact scan & helpers
# ===========================================================================

class TestExactScanAndHelpers:

    def test_exact_counts_real_weekdays(self):
        """Mon 2 Mar → Wed 11 Mar: 8 weekdays (the estimate gives round(7.14) = 7)."""
        arrival, departure = date(2026, 3, 2), date(2026, 3, 11)
        assert calculate_workdays(arrival, departure, WEEKDAYS, WorkdayMethod.EXACT) == 8
        assert calculate_workdays(arrival, departure, WEEKDAYS) == 7

    def test_exact_with_weekend_pattern(self):
        assert count_matching_weekdays(date(2026, 3, 2), date(2026, 3, 15), {"Saturday", "Sunday"}) == 4

    def test_normalise_drops_unknown_labels(self):
        assert normalise_weekdays(["Monday", "Funday"]) == {"Monday"}

    def test_normalise_none_is_default_pattern(self):
        assert normalise_weekdays(None) == set(WEEKDAYS)

    @pytest.mark.parametrize("value, expected", [
        (2.5, 3), (3.49, 3), (0.5, 1), (7.0, 7), (1e30, 10 ** 30),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_schedule_bundle(self):
        result = calculate_schedule(date(2026, 3, 2), date(2026, 3, 8), WEEKDAYS)
        assert result == {"calendar_days": 7, "nights": 6, "workdays": 5, "workdays_per_week": 5}
