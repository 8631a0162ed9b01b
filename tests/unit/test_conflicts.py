"""Unit tests for booking conflict detection."""

from datetime import datetime

import pytest

from app.models.booking import Booking
from app.services.conflicts import find_conflicts, intervals_overlap


def day(n: int) -> datetime:
    return datetime(2026, 3, n)


def booking(booking_id: int, start: int, end: int, status: str = "scheduled") -> Booking:
    return Booking(
        id=booking_id,
        environment_id=1,
        team_id=1,
        user_id=1,
        start_date=day(start),
        end_date=day(end),
        configuration="default",
        status=status,
    )


class TestIntervalsOverlap:
    @pytest.mark.parametrize(
        "a, b",
        [
            ((5, 10), (3, 15)),
            ((5, 10), (10, 12)),
            ((5, 10), (11, 15)),
            ((5, 10), (6, 7)),
            ((1, 2), (2, 3)),
            ((1, 4), (5, 9)),
        ],
    )
    def test_symmetric(self, a, b):
        assert intervals_overlap(day(a[0]), day(a[1]), day(b[0]), day(b[1])) == intervals_overlap(
            day(b[0]), day(b[1]), day(a[0]), day(a[1])
        )

    def test_start_inside_existing(self):
        assert intervals_overlap(day(7), day(15), day(5), day(10))

    def test_end_inside_existing(self):
        assert intervals_overlap(day(1), day(7), day(5), day(10))

    def test_contains_existing(self):
        assert intervals_overlap(day(3), day(15), day(5), day(10))

    def test_inside_existing(self):
        assert intervals_overlap(day(6), day(8), day(5), day(10))

    def test_shared_boundary_overlaps(self):
        assert intervals_overlap(day(10), day(12), day(5), day(10))
        assert intervals_overlap(day(1), day(5), day(5), day(10))

    def test_disjoint(self):
        assert not intervals_overlap(day(11), day(15), day(5), day(10))
        assert not intervals_overlap(day(1), day(4), day(5), day(10))


class TestFindConflicts:
    def test_containment_is_a_conflict(self):
        existing = booking(1, 5, 10)
        assert find_conflicts(day(3), day(15), [existing]) == [existing]

    def test_boundary_touch_is_a_conflict(self):
        existing = booking(1, 5, 10)
        assert find_conflicts(day(10), day(12), [existing]) == [existing]

    def test_no_overlap(self):
        assert find_conflicts(day(11), day(15), [booking(1, 5, 10)]) == []

    def test_empty_existing(self):
        assert find_conflicts(day(1), day(2), []) == []

    def test_booking_never_conflicts_with_itself(self):
        existing = booking(7, 5, 10)
        assert find_conflicts(day(5), day(10), [existing], exclude_booking_id=7) == []
        assert find_conflicts(day(5), day(10), [existing]) == [existing]

    def test_exclusion_keeps_other_conflicts(self):
        own = booking(7, 5, 10)
        other = booking(8, 9, 12)
        assert find_conflicts(day(5), day(10), [own, other], exclude_booking_id=7) == [other]

    @pytest.mark.parametrize("status", ["completed", "cancelled", "active"])
    def test_non_scheduled_bookings_do_not_block(self, status):
        assert find_conflicts(day(5), day(10), [booking(1, 5, 10, status=status)]) == []

    def test_custom_blocking_statuses(self):
        active = booking(1, 5, 10, status="active")
        completed = booking(2, 5, 10, status="completed")
        result = find_conflicts(
            day(6),
            day(7),
            [active, completed],
            blocking_statuses=("scheduled", "active"),
        )
        assert result == [active]

    def test_returns_only_overlapping_in_input_order(self):
        first = booking(1, 1, 3)
        clear = booking(2, 20, 25)
        second = booking(3, 8, 9)
        assert find_conflicts(day(2), day(8), [first, clear, second]) == [first, second]
