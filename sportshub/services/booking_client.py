"""
Async client for the remote booking service.

The booking service is the record of truth for bookings:

    GET  {base}/bookings   -> JSON array of bookings
    POST {base}/bookings   -> created booking on 2xx, {"error": "..."} otherwise

No retries are performed here; callers decide what to do with a failure.
"""
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

from sportshub.models.booking import Booking
from sportshub.utils.exceptions import BookingServiceError

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Could not connect to server. Please ensure backend is running."
UNKNOWN_ERROR_MESSAGE = "Unknown error"


@dataclass
class BookingResult:
    """Outcome of a booking submission."""

    ok: bool
    booking: Optional[Booking] = None
    error: str = ""
    # True when the server never answered (as opposed to answering with an error)
    unreachable: bool = False

    @classmethod
    def success(cls, booking: Booking) -> "BookingResult":
        return cls(ok=True, booking=booking)

    @classmethod
    def failure(cls, error: str, unreachable: bool = False) -> "BookingResult":
        return cls(ok=False, error=error, unreachable=unreachable)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class BookingClient:
    """
    Thin wrapper around httpx.AsyncClient for the booking endpoints.

    Usage:
        async with BookingClient("http://localhost:5000/api") as client:
            bookings = await client.list_bookings()
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        if client is None:
            # Without an explicit timeout httpx applies its own default
            options = {"headers": {"Accept": "application/json"}}
            if timeout is not None:
                options["timeout"] = timeout
            client = httpx.AsyncClient(**options)
        self._client = client

    async def __aenter__(self) -> "BookingClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def bookings_url(self) -> str:
        return f"{self.base_url}/bookings"

    async def list_bookings(self) -> List[Booking]:
        """
        Fetch the current booking list.

        Returns:
            List[Booking]: Snapshot of all bookings

        Raises:
            BookingServiceError: On transport failure, non-2xx status or a
                body that is not a JSON array
        """
        try:
            response = await self._client.get(self.bookings_url)
        except httpx.HTTPError as e:
            raise BookingServiceError(f"GET {self.bookings_url} failed: {e}") from e

        if not response.is_success:
            raise BookingServiceError(
                f"GET {self.bookings_url} returned {response.status_code}",
                status_code=response.status_code,
            )

        payload = _json_or_none(response)
        if not isinstance(payload, list):
            raise BookingServiceError(
                f"GET {self.bookings_url} did not return a list",
                status_code=response.status_code,
            )

        # Every array entry is a slot; non-object entries carry no sport
        return [Booking.from_dict(item if isinstance(item, dict) else {}) for item in payload]

    async def create_booking(self, booking: Booking) -> BookingResult:
        """
        Submit a new booking.

        Args:
            booking: Booking to create

        Returns:
            BookingResult
            - success with the server's copy of the booking on 2xx
            - failure with the server's "error" text (or "Unknown error") on non-2xx
            - failure flagged unreachable when the request never completed
        """
        try:
            response = await self._client.post(self.bookings_url, json=booking.to_dict())
        except httpx.HTTPError as e:
            logger.error(f"Booking submission failed: {e}")
            return BookingResult.failure(CONNECTION_ERROR_MESSAGE, unreachable=True)

        payload = _json_or_none(response)

        if response.is_success:
            if isinstance(payload, dict):
                return BookingResult.success(Booking.from_dict({**booking.to_dict(), **payload}))
            return BookingResult.success(booking)

        error = ""
        if isinstance(payload, dict) and payload.get("error"):
            error = str(payload["error"])
        logger.warning("Booking rejected with status %s: %s", response.status_code, error or "no detail")
        return BookingResult.failure(error or UNKNOWN_ERROR_MESSAGE)
