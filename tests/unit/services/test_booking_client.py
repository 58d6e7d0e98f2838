"""Unit tests for the booking service client."""
import asyncio
import json

import httpx
import pytest

from sportshub.models.booking import Booking
from sportshub.services.booking_client import (
    BookingClient,
    CONNECTION_ERROR_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
)
from sportshub.utils.exceptions import BookingServiceError

BASE_URL = "http://bookings.test/api"


def _client(handler) -> BookingClient:
    transport = httpx.MockTransport(handler)
    return BookingClient(BASE_URL, client=httpx.AsyncClient(transport=transport))


def _run(coro):
    return asyncio.run(coro)


@pytest.fixture
def booking():
    return Booking(sport="Tennis", date="2025-06-01", time="18:30", user="guest")


class TestListBookings:
    """Test list_bookings."""

    def test_returns_bookings(self):
        def handler(request):
            assert request.method == "GET"
            assert str(request.url) == f"{BASE_URL}/bookings"
            return httpx.Response(200, json=[
                {"sport": "Tennis", "date": "2025-06-01", "time": "18:30", "user": "a"},
                {"sport": "Football", "date": "2025-06-02", "time": "07:00", "user": "b"},
            ])

        bookings = _run(_client(handler).list_bookings())

        assert [b.sport for b in bookings] == ["Tennis", "Football"]

    def test_non_object_items_become_blank_bookings(self):
        def handler(request):
            return httpx.Response(200, json=[{"sport": "Tennis"}, "junk", None])

        bookings = _run(_client(handler).list_bookings())

        assert len(bookings) == 3
        assert [b.sport for b in bookings] == ["Tennis", "", ""]

    def test_non_success_status_raises(self):
        def handler(request):
            return httpx.Response(503, json={"error": "down"})

        with pytest.raises(BookingServiceError) as exc_info:
            _run(_client(handler).list_bookings())

        assert exc_info.value.status_code == 503

    def test_non_list_body_raises(self):
        def handler(request):
            return httpx.Response(200, json={"bookings": []})

        with pytest.raises(BookingServiceError, match="did not return a list"):
            _run(_client(handler).list_bookings())

    def test_invalid_json_raises(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(BookingServiceError):
            _run(_client(handler).list_bookings())

    def test_network_failure_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BookingServiceError, match="failed"):
            _run(_client(handler).list_bookings())


class TestCreateBooking:
    """Test create_booking."""

    def test_posts_json_body(self, booking):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={**seen["body"], "_id": "abc"})

        result = _run(_client(handler).create_booking(booking))

        assert seen["method"] == "POST"
        assert seen["body"] == {"sport": "Tennis", "date": "2025-06-01", "time": "18:30", "user": "guest"}
        assert result.ok
        assert result.booking == booking

    def test_success_without_body_echoes_booking(self, booking):
        def handler(request):
            return httpx.Response(204)

        result = _run(_client(handler).create_booking(booking))

        assert result.ok
        assert result.booking == booking

    def test_server_error_message_is_used(self, booking):
        def handler(request):
            return httpx.Response(409, json={"error": "Slot already taken"})

        result = _run(_client(handler).create_booking(booking))

        assert not result.ok
        assert result.error == "Slot already taken"
        assert not result.unreachable

    def test_server_error_without_message(self, booking):
        def handler(request):
            return httpx.Response(500, text="Internal Server Error")

        result = _run(_client(handler).create_booking(booking))

        assert not result.ok
        assert result.error == UNKNOWN_ERROR_MESSAGE

    def test_unreachable_server(self, booking):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = _run(_client(handler).create_booking(booking))

        assert not result.ok
        assert result.unreachable
        assert result.error == CONNECTION_ERROR_MESSAGE


class TestLifecycle:
    """Test client ownership and context management."""

    def test_injected_client_is_not_closed(self):
        inner = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))

        async def scenario():
            async with BookingClient(BASE_URL, client=inner) as client:
                await client.list_bookings()
            return inner.is_closed

        assert _run(scenario()) is False

    def test_owned_client_is_closed(self):
        async def scenario():
            client = BookingClient(BASE_URL + "/")
            async with client:
                pass
            return client

        client = _run(scenario())

        assert client._client.is_closed
        assert client.bookings_url == f"{BASE_URL}/bookings"
