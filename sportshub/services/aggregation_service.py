"""Aggregation of bookings and registrations into summary metrics."""
from typing import Dict, Sequence

from sportshub.models.booking import Booking
from sportshub.models.registration import Registration
from sportshub.models.report import Metrics

FALLBACK_SPORT = "Football"


def count_sports(bookings: Sequence[Booking]) -> Dict[str, int]:
    """
    Count bookings per sport.

    Args:
        bookings: Booking snapshot

    Returns:
        Dict[str, int]: sport -> count, in first-encountered order;
        bookings without a sport are not counted
    """
    counts: Dict[str, int] = {}
    for booking in bookings:
        if not booking.sport:
            continue
        counts[booking.sport] = counts.get(booking.sport, 0) + 1
    return counts


def most_popular_sport(bookings: Sequence[Booking]) -> str:
    """
    Return the most booked sport.

    Ties go to the sport seen first in the booking list. With no countable
    bookings the fallback "Football" is returned.
    """
    counts = count_sports(bookings)
    if not counts:
        return FALLBACK_SPORT
    # sorted() is stable, so equal counts keep insertion order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[0][0]


def aggregate(
    bookings: Sequence[Booking],
    registrations: Sequence[Registration],
    event_card_count: int,
) -> Metrics:
    """
    Combine a booking snapshot and the registration collection into Metrics.

    Args:
        bookings: Bookings fetched for this cycle
        registrations: Stored registrations
        event_card_count: Number of event cards on display

    Returns:
        Metrics: total events, participants, slots booked, most popular sport

    Behavior:
        - Pure: inputs are only read
        - Total: empty inputs give zero counts and the fallback sport
    """
    return Metrics(
        total_events=event_card_count,
        total_participants=len(registrations),
        slots_booked=len(bookings),
        most_popular_sport=most_popular_sport(bookings),
    )
