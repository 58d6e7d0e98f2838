"""Booking data model."""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Booking:
    """A reserved facility slot as reported by the booking service."""

    sport: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    user: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Booking":
        """Build from a remote record; missing or null fields become empty strings."""
        def _text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            sport=_text("sport"),
            date=_text("date"),
            time=_text("time"),
            user=_text("user"),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "sport": self.sport,
            "date": self.date,
            "time": self.time,
            "user": self.user,
        }
