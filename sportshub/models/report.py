"""Report data models: summary metrics and the detailed report."""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union


@dataclass(frozen=True)
class Metrics:
    """Summary figures shown on the report cards."""

    total_events: int
    total_participants: int
    slots_booked: int
    most_popular_sport: str

    def as_dict(self) -> Dict[str, Union[int, str]]:
        return {
            "total_events": self.total_events,
            "total_participants": self.total_participants,
            "slots_booked": self.slots_booked,
            "most_popular_sport": self.most_popular_sport,
        }


@dataclass
class EventItem:
    """An entry of the event inventory (one event card)."""

    title: str
    description: str = ""

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("Event title cannot be empty")

    def label(self) -> str:
        if self.description:
            return f"{self.title} — {self.description}"
        return self.title


@dataclass
class DetailedReport:
    """Grouped listings for the on-demand report view."""

    sport_counts: List[Tuple[str, int]] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    participants: List[str] = field(default_factory=list)
