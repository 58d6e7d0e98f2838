"""Projection of metrics onto report slots and the detailed report model."""
from dataclasses import dataclass
from typing import Iterable, List, Protocol, Sequence, Union

from sportshub.models.booking import Booking
from sportshub.models.registration import Registration
from sportshub.models.report import DetailedReport, EventItem, Metrics
from sportshub.services.aggregation_service import count_sports

# Stable metric key -> heading text of the matching report card
METRIC_KEYS = {
    "total_events": "total events",
    "total_participants": "total participants",
    "slots_booked": "slots booked",
    "most_popular_sport": "most popular sport",
}

NO_BOOKINGS_PLACEHOLDER = "No bookings yet"
NO_PARTICIPANTS_PLACEHOLDER = "No participants yet"


class ReportTarget(Protocol):
    """Anything that can display a metric value under a metric key."""

    def set_slot(self, metric_key: str, value: Union[int, str]) -> None:
        ...


@dataclass
class ReportCard:
    """A report card identified only by its heading text."""

    heading: str
    value: str = ""


def project(metrics: Metrics, target: ReportTarget) -> None:
    """Write every metric into the target slot of the same key."""
    values = metrics.as_dict()
    for metric_key in METRIC_KEYS:
        target.set_slot(metric_key, values[metric_key])


def project_by_heading(metrics: Metrics, cards: Iterable[ReportCard]) -> None:
    """
    Fill report cards by matching their headings.

    Args:
        metrics: Computed metrics
        cards: Cards to update in place

    Behavior:
        - Case-insensitive substring match against METRIC_KEYS headings
        - First matching metric wins; unmatched cards are left untouched
    """
    values = metrics.as_dict()
    for card in cards:
        heading = (card.heading or "").lower()
        for metric_key, label in METRIC_KEYS.items():
            if label in heading:
                card.value = str(values[metric_key])
                break


def project_detailed(
    bookings: Sequence[Booking],
    registrations: Sequence[Registration],
    event_inventory: Sequence[EventItem],
) -> DetailedReport:
    """
    Build the detailed report listings.

    Returns:
        DetailedReport with
        - sport_counts: bookings per sport, in first-booked order
        - events: one label per event card
        - participants: "<name> (<event>)" per registration
    """
    return DetailedReport(
        sport_counts=list(count_sports(bookings).items()),
        events=[item.label() for item in event_inventory],
        participants=[f"{r.name} ({r.event})" for r in registrations],
    )


def sport_lines(report: DetailedReport) -> List[str]:
    """Lines for the bookings-per-sport listing, with placeholder when empty."""
    lines = [f"{sport}: {count}" for sport, count in report.sport_counts]
    return lines or [NO_BOOKINGS_PLACEHOLDER]


def participant_lines(report: DetailedReport) -> List[str]:
    """Lines for the participants listing, with placeholder when empty."""
    return list(report.participants) or [NO_PARTICIPANTS_PLACEHOLDER]
