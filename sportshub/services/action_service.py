"""User actions (book a slot, register for an event, open reports) and report refresh."""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from sportshub.models.booking import Booking
from sportshub.models.report import DetailedReport, EventItem, Metrics
from sportshub.services.aggregation_service import aggregate
from sportshub.services.booking_client import BookingClient
from sportshub.services.registration_service import list_registrations, register_participant
from sportshub.services.report_service import ReportTarget, project, project_detailed
from sportshub.services.storage_service import LocalStoreAdapter
from sportshub.utils.exceptions import BookingServiceError, FileWriteError, ValidationError
from sportshub.utils.validation import validate_booking_fields

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """What the UI should tell the user after an action."""

    success: bool
    message: str
    reset_form: bool = False


class ActionOrchestrator:
    """
    Wires form submissions and report requests to the services.

    Every refresh cycle takes a generation number when it starts. A cycle
    only projects its metrics if no newer cycle has started in the meantime,
    so a slow, superseded fetch can never overwrite fresher figures.
    """

    def __init__(
        self,
        adapter: LocalStoreAdapter,
        client_factory: Callable[[], BookingClient],
        inventory_loader: Callable[[], List[EventItem]],
        target: ReportTarget,
    ) -> None:
        self.adapter = adapter
        self.client_factory = client_factory
        self.inventory_loader = inventory_loader
        self.target = target
        self.last_metrics: Optional[Metrics] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def refresh_reports(self) -> Optional[Metrics]:
        """
        Run one aggregation cycle and project the result.

        Returns:
            Metrics that were projected, or None when the cycle failed or was
            superseded by a newer one

        Behavior:
            - Never raises; failures are logged and the previously projected
              metrics stay on screen
        """
        self._generation += 1
        generation = self._generation

        try:
            async with self.client_factory() as client:
                bookings = await client.list_bookings()

            registrations = list_registrations(self.adapter)
            inventory = self.inventory_loader()
            metrics = aggregate(bookings, registrations, len(inventory))

            if generation != self._generation:
                logger.debug(
                    "Discarding report cycle %s, superseded by cycle %s",
                    generation, self._generation,
                )
                return None

            project(metrics, self.target)
        except BookingServiceError as e:
            logger.error(f"Report update error: {e}")
            return None
        except Exception:
            logger.exception("Unexpected error during report update")
            return None

        self.last_metrics = metrics
        return metrics

    async def submit_booking(self, form: Dict[str, Any]) -> ActionResult:
        """
        Submit the slot booking form.

        Args:
            form: Mapping with sport, date (YYYY-MM-DD) and time (HH:MM)

        Returns:
            ActionResult
            - success, reset_form=True after the service accepted the booking;
              reports are refreshed
            - failure with validation, server or connection message otherwise;
              no refresh, form kept
        """
        is_valid, error_msg = validate_booking_fields(form)
        if not is_valid:
            return ActionResult(False, error_msg)

        booking = Booking(
            sport=str(form["sport"]).strip(),
            date=str(form["date"]).strip(),
            time=str(form["time"]).strip(),
            user=self.adapter.get_user(),
        )

        async with self.client_factory() as client:
            result = await client.create_booking(booking)

        if not result.ok:
            if result.unreachable:
                return ActionResult(False, f"⚠️ {result.error}")
            return ActionResult(False, f"❌ Failed to book slot: {result.error}")

        await self.refresh_reports()
        return ActionResult(
            True,
            f"🎯 Slot booked successfully for {booking.sport} on {booking.date} at {booking.time}!",
            reset_form=True,
        )

    async def submit_registration(self, form: Dict[str, Any]) -> ActionResult:
        """
        Submit the event registration form.

        Returns:
            ActionResult
            - success, reset_form=True once the registration is stored;
              reports are refreshed
            - failure with the validation message, or a save error when the
              local store rejected the write
        """
        try:
            registration = register_participant(self.adapter, form)
        except ValidationError as e:
            return ActionResult(False, str(e))
        except FileWriteError as e:
            logger.error(f"Registration not saved: {e}")
            return ActionResult(False, "Could not save your registration. Please try again.")

        await self.refresh_reports()
        return ActionResult(
            True,
            f'✅ Registered {registration.name} to "{registration.event}" successfully!',
            reset_form=True,
        )

    async def build_detailed_report(self) -> DetailedReport:
        """
        Build the detailed report from a fresh booking snapshot.

        An unreachable booking service yields an empty booking listing.
        """
        try:
            async with self.client_factory() as client:
                bookings = await client.list_bookings()
        except BookingServiceError as e:
            logger.error(f"Detailed report could not load bookings: {e}")
            bookings = []

        return project_detailed(
            bookings,
            list_registrations(self.adapter),
            self.inventory_loader(),
        )
