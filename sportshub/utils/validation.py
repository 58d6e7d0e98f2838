"""Data validation utilities."""
import re
from datetime import datetime
from typing import Any, Dict, Tuple

PHONE_PATTERN = re.compile(r"[0-9]{10}")

REGISTRATION_FIELDS = ("event", "name", "email", "phone")
BOOKING_FIELDS = ("sport", "date", "time")


def validate_phone(phone: str) -> Tuple[bool, str]:
    """
    Validate a contact number.

    Args:
        phone: Phone number as typed by the user (already trimmed)

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if exactly 10 decimal digits
        - (False, "Please enter a valid 10-digit contact number.") otherwise
    """
    if not isinstance(phone, str) or not PHONE_PATTERN.fullmatch(phone):
        return False, "Please enter a valid 10-digit contact number."
    return True, ""


def clean_registration_fields(fields: Dict[str, Any]) -> Dict[str, str]:
    """
    Normalize raw registration form values.

    Args:
        fields: Mapping with event, name, email and phone keys

    Returns:
        Dict with the same keys, values converted to str and trimmed
        (event is kept as selected, name/email/phone are stripped)
    """
    cleaned = {}
    for key in REGISTRATION_FIELDS:
        value = fields.get(key)
        value = "" if value is None else str(value)
        cleaned[key] = value if key == "event" else value.strip()
    return cleaned


def validate_registration_fields(fields: Dict[str, str]) -> Tuple[bool, str]:
    """
    Validate cleaned registration fields, reporting the first violated rule.

    Args:
        fields: Output of clean_registration_fields

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (False, "Please fill in all registration fields.") if any is empty
          or whitespace only
        - (False, "Please enter a valid 10-digit contact number.") if phone is invalid
        - (True, "") otherwise
    """
    for key in REGISTRATION_FIELDS:
        if not (fields.get(key) or "").strip():
            return False, "Please fill in all registration fields."

    return validate_phone(fields["phone"])


def validate_date_format(date_str: str) -> bool:
    """
    Validate date string in YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid

    Raises:
        ValueError: If date format is invalid
    """
    if not isinstance(date_str, str):
        raise ValueError("Date must be a string")

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Date must be in YYYY-MM-DD format: {date_str}")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date value: {date_str} - {str(e)}")

    return True


def validate_slot_time(time_str: str) -> bool:
    """
    Validate a slot start time in HH:MM format.

    Raises:
        ValueError: If time format is invalid
    """
    if not isinstance(time_str, str):
        raise ValueError("Time must be a string")

    if not re.match(r"^\d{2}:\d{2}$", time_str):
        raise ValueError(f"Time must be in HH:MM format: {time_str}")

    try:
        datetime.strptime(time_str, "%H:%M")
    except ValueError:
        raise ValueError(f"Invalid time value: {time_str}")

    return True


def validate_booking_fields(fields: Dict[str, Any]) -> Tuple[bool, str]:
    """
    Validate booking form values.

    Args:
        fields: Mapping with sport, date and time keys

    Returns:
        Tuple of (is_valid: bool, error_message: str)
    """
    for key in BOOKING_FIELDS:
        value = fields.get(key)
        if not value or not str(value).strip():
            return False, "Please choose a sport, date and time."

    try:
        validate_date_format(str(fields["date"]))
        validate_slot_time(str(fields["time"]))
    except ValueError as e:
        return False, str(e)

    return True, ""
