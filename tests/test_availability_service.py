"""Unit tests for the availability checker."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from app.models.booking import Booking
from app.services.availability_service import find_conflicts, is_available, overlaps


def make_booking(vehicle="Civic", pickup="2024-06-01", ret="2024-06-05", booking_id=1):
    return Booking(id=booking_id, vehicle=vehicle, pickup_date=pickup, return_date=ret)


class TestOverlap:
    @pytest.mark.parametrize("pickup, ret, expected", [
        ("2024-06-03", "2024-06-04", True),    # fully contained
        ("2024-05-28", "2024-06-02", True),    # overlaps start
        ("2024-06-04", "2024-06-09", True),    # overlaps end
        ("2024-05-01", "2024-07-01", True),    # covers whole booking
        ("2024-06-05", "2024-06-07", True),    # starts on return day
        ("2024-05-25", "2024-06-01", True),    # ends on pickup day
        ("2024-06-06", "2024-06-09", False),   # strictly after
        ("2024-05-20", "2024-05-31", False),   # strictly before
    ])
    def test_inclusive_overlap(self, pickup, ret, expected):
        assert overlaps(make_booking(), pickup, ret) is expected

    def test_booking_without_dates_never_overlaps(self):
        booking = Booking(id=1, vehicle="Civic", pickup_date=None, return_date=None)
        assert overlaps(booking, "2024-06-01", "2024-06-05") is False


class TestIsAvailable:
    def test_empty_store_is_available(self):
        assert is_available([], "Civic", "2024-06-01", "2024-06-05")

    def test_contained_range_is_unavailable(self):
        assert not is_available([make_booking()], "Civic", "2024-06-03", "2024-06-04")

    def test_other_vehicle_does_not_block(self):
        assert is_available([make_booking(vehicle="Corolla")], "Civic", "2024-06-03", "2024-06-04")

    def test_vehicle_match_is_exact(self):
        assert is_available([make_booking(vehicle="civic")], "Civic", "2024-06-03", "2024-06-04")

    def test_adjacent_range_is_available(self):
        assert is_available([make_booking()], "Civic", "2024-06-06", "2024-06-08")

    def test_find_conflicts_returns_every_overlap(self):
        bookings = [
            make_booking(booking_id=1),
            make_booking(pickup="2024-06-10", ret="2024-06-12", booking_id=2),
            make_booking(pickup="2024-06-04", ret="2024-06-11", booking_id=3),
        ]
        conflicts = find_conflicts(bookings, "Civic", "2024-06-05", "2024-06-10")
        assert [b.id for b in conflicts] == [1, 2, 3]

    def test_comparison_is_lexical(self):
        # Not calendar-aware: "2024-6-9" sorts after "2024-06-30"
        booking = make_booking(pickup="2024-06-01", ret="2024-06-30")
        assert is_available([booking], "Civic", "2024-6-9", "2024-6-9")
