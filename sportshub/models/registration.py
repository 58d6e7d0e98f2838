"""Registration data model."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from sportshub.utils.validation import validate_phone


@dataclass
class Registration:
    """A participant's signup for an event."""

    id: str
    event: str
    name: str
    email: str
    phone: str
    created_at: str  # ISO 8601 format

    def __post_init__(self):
        """Validate registration data."""
        if not self.id or not self.id.strip():
            raise ValueError("Registration ID cannot be empty")

        for field_name in ("event", "name", "email"):
            value = getattr(self, field_name)
            if not value or not value.strip():
                raise ValueError(f"{field_name.capitalize()} cannot be empty")

        is_valid, error_msg = validate_phone(self.phone)
        if not is_valid:
            raise ValueError(error_msg)

        try:
            datetime.fromisoformat(self.created_at.replace('Z', '+00:00'))
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid timestamp format: {self.created_at}") from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Registration":
        """
        Build from a stored record.

        Raises:
            KeyError: If a required key is missing
            ValueError: If the record violates registration rules
        """
        return cls(
            id=data["id"],
            event=data["event"],
            name=data["name"],
            email=data["email"],
            phone=data["phone"],
            created_at=data["createdAt"],
        )

    def to_dict(self) -> Dict[str, str]:
        """Serialize using the storage key names (createdAt)."""
        return {
            "id": self.id,
            "event": self.event,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "createdAt": self.created_at,
        }
