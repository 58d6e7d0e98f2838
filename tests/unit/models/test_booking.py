"""Unit tests for the Booking model."""
from sportshub.models.booking import Booking


class TestBooking:
    """Test Booking construction from remote data."""

    def test_from_dict(self):
        booking = Booking.from_dict({"sport": "Tennis", "date": "2025-06-01", "time": "18:30", "user": "guest"})

        assert booking == Booking("Tennis", "2025-06-01", "18:30", "guest")

    def test_from_dict_tolerates_missing_and_null_fields(self):
        booking = Booking.from_dict({"sport": None, "date": "2025-06-01", "_id": "abc"})

        assert booking.sport == ""
        assert booking.time == ""
        assert booking.user == ""

    def test_to_dict_is_post_body(self):
        booking = Booking("Football", "2025-06-01", "07:00", "sam")

        assert booking.to_dict() == {"sport": "Football", "date": "2025-06-01", "time": "07:00", "user": "sam"}
