"""Registration service for event signups stored in the local store."""
import logging
import time
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List

from sportshub.models.registration import Registration
from sportshub.services.storage_service import LocalStoreAdapter, STORAGE_KEYS
from sportshub.utils.exceptions import ValidationError
from sportshub.utils.validation import (
    clean_registration_fields,
    validate_registration_fields,
)

logger = logging.getLogger(__name__)

REGISTRATIONS_KEY = STORAGE_KEYS["registrations"]

_last_id_ms = 0
_id_lock = Lock()


def generate_registration_id(floor_ms: int = 0) -> str:
    """
    Generate a registration id of the form "r_<epoch milliseconds>".

    Consecutive calls within the same millisecond are bumped forward so ids
    issued by this process are strictly increasing. floor_ms lets callers
    skip past ids already present in storage.
    """
    global _last_id_ms

    with _id_lock:
        now_ms = int(time.time() * 1000)
        now_ms = max(now_ms, _last_id_ms + 1, floor_ms + 1)
        _last_id_ms = now_ms
        return f"r_{now_ms}"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _latest_id_ms(records: List[Any]) -> int:
    latest = 0
    for record in records:
        if not isinstance(record, dict):
            continue
        stamp = str(record.get("id", ""))[2:]
        if stamp.isdigit():
            latest = max(latest, int(stamp))
    return latest


def list_registrations(adapter: LocalStoreAdapter) -> List[Registration]:
    """
    Load all stored registrations in insertion order.

    Records that no longer parse are skipped and logged.
    """
    registrations = []
    for record in adapter.read(REGISTRATIONS_KEY):
        if not isinstance(record, dict):
            logger.warning("Skipping non-object registration record: %r", record)
            continue
        try:
            registrations.append(Registration.from_dict(record))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping malformed registration record: {e}")
    return registrations


def register_participant(adapter: LocalStoreAdapter, fields: Dict[str, Any]) -> Registration:
    """
    Validate and persist a new registration.

    Args:
        adapter: Local store adapter holding the registrations collection
        fields: Raw form values with event, name, email and phone

    Returns:
        Registration: The newly stored registration

    Raises:
        ValidationError: First violated rule (empty field, then phone format);
            nothing is written
        FileWriteError: If the store could not persist the collection

    Behavior:
        - Trims name, email and phone
        - Stamps created_at with the current UTC time
        - Read-modify-write of the whole collection; assumes a single writer
    """
    cleaned = clean_registration_fields(fields)
    is_valid, error_msg = validate_registration_fields(cleaned)
    if not is_valid:
        raise ValidationError(error_msg)

    records = adapter.read(REGISTRATIONS_KEY)

    registration = Registration(
        id=generate_registration_id(_latest_id_ms(records)),
        event=cleaned["event"],
        name=cleaned["name"],
        email=cleaned["email"],
        phone=cleaned["phone"],
        created_at=_utc_timestamp(),
    )

    records.append(registration.to_dict())
    adapter.write(REGISTRATIONS_KEY, records)

    logger.info("Registered %s for %s (%s)", registration.name, registration.event, registration.id)
    return registration
