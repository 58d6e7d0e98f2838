"""Unit tests for aggregation_service."""
import copy

import pytest

from sportshub.models.booking import Booking
from sportshub.models.registration import Registration
from sportshub.models.report import Metrics
from sportshub.services.aggregation_service import (
    FALLBACK_SPORT,
    aggregate,
    count_sports,
    most_popular_sport,
)


def _booking(sport: str) -> Booking:
    return Booking(sport=sport, date="2025-06-01", time="18:30", user="guest")


def _registration(index: int) -> Registration:
    return Registration(
        id=f"r_17000000000{index:02d}",
        event="Summer Tennis Open",
        name=f"Player {index}",
        email=f"p{index}@example.com",
        phone="9876543210",
        created_at="2024-05-01T10:00:00.000Z",
    )


class TestMostPopularSport:
    """Test most_popular_sport selection."""

    def test_strict_winner(self):
        bookings = [_booking(s) for s in ["Football", "Tennis", "Tennis", "Cricket"]]

        assert most_popular_sport(bookings) == "Tennis"

    def test_tie_goes_to_first_seen(self):
        bookings = [_booking(s) for s in ["Cricket", "Tennis", "Tennis", "Cricket"]]

        assert most_popular_sport(bookings) == "Cricket"

    def test_tie_order_follows_first_appearance_not_alphabet(self):
        bookings = [_booking(s) for s in ["Volleyball", "Badminton"]]

        assert most_popular_sport(bookings) == "Volleyball"

    def test_empty_uses_fallback(self):
        assert most_popular_sport([]) == FALLBACK_SPORT == "Football"

    def test_bookings_without_sport_are_ignored(self):
        bookings = [_booking(""), _booking(""), _booking("Tennis")]

        assert most_popular_sport(bookings) == "Tennis"

    def test_only_blank_sports_uses_fallback(self):
        assert most_popular_sport([_booking(""), _booking("")]) == FALLBACK_SPORT


class TestCountSports:
    """Test count_sports."""

    def test_counts_in_insertion_order(self):
        bookings = [_booking(s) for s in ["Tennis", "Football", "Tennis"]]

        assert list(count_sports(bookings).items()) == [("Tennis", 2), ("Football", 1)]


class TestAggregate:
    """Test aggregate function."""

    def test_tennis_scenario(self):
        bookings = [_booking("Tennis"), _booking("Tennis"), _booking("Football")]
        registrations = [_registration(1), _registration(2)]

        metrics = aggregate(bookings, registrations, event_card_count=4)

        assert metrics == Metrics(
            total_events=4,
            total_participants=2,
            slots_booked=3,
            most_popular_sport="Tennis",
        )

    def test_empty_scenario(self):
        metrics = aggregate([], [], event_card_count=0)

        assert metrics.slots_booked == 0
        assert metrics.total_participants == 0
        assert metrics.total_events == 0
        assert metrics.most_popular_sport == "Football"

    def test_blank_sport_bookings_still_count_as_slots(self):
        metrics = aggregate([_booking(""), _booking("Tennis")], [], event_card_count=1)

        assert metrics.slots_booked == 2

    @pytest.mark.parametrize("count", [0, 1, 7])
    def test_total_participants_is_collection_length(self, count):
        registrations = [_registration(i) for i in range(count)]

        assert aggregate([], registrations, 0).total_participants == count

    def test_inputs_are_not_mutated(self):
        bookings = [_booking("Tennis"), _booking("Football")]
        registrations = [_registration(1)]
        bookings_before = copy.deepcopy(bookings)
        registrations_before = copy.deepcopy(registrations)

        aggregate(bookings, registrations, 2)

        assert bookings == bookings_before
        assert registrations == registrations_before

    def test_idempotent(self):
        bookings = [_booking(s) for s in ["Cricket", "Tennis", "Tennis"]]
        registrations = [_registration(1)]

        assert aggregate(bookings, registrations, 3) == aggregate(bookings, registrations, 3)

    def test_accepts_tuples(self):
        metrics = aggregate((_booking("Tennis"),), (), 0)

        assert metrics.slots_booked == 1
