"""Event inventory and sport catalogue loaded from the site's data file."""
import logging
from typing import List, Optional

from sportshub.models.report import EventItem
from sportshub.services.storage_service import load_json

logger = logging.getLogger(__name__)

# Default data file, relative to the working directory
EVENTS_FILE = "data/events.json"

DEFAULT_SPORTS = ["Football", "Cricket", "Basketball", "Tennis", "Badminton"]

_inventory_cache: Optional[List[EventItem]] = None


def _clear_cache():
    """Drop the cached inventory so the next call rereads the file."""
    global _inventory_cache
    _inventory_cache = None


def _load(file_path: str) -> dict:
    try:
        data = load_json(file_path)
    except FileNotFoundError:
        logger.warning("Event file %s not found", file_path)
        return {}
    except ValueError as e:
        logger.warning(f"Event file {file_path} is malformed: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def get_event_inventory(file_path: Optional[str] = None) -> List[EventItem]:
    """
    Load the event cards shown on the page.

    Args:
        file_path: Override for EVENTS_FILE (bypasses the cache)

    Returns:
        List[EventItem]: Events in file order; invalid entries are skipped
    """
    global _inventory_cache

    if file_path is None and _inventory_cache is not None:
        return _inventory_cache

    items = []
    for entry in _load(file_path or EVENTS_FILE).get("events", []):
        if not isinstance(entry, dict):
            continue
        try:
            items.append(EventItem(
                title=str(entry.get("title", "")),
                description=str(entry.get("description", "")),
            ))
        except ValueError as e:
            logger.warning(f"Skipping event entry: {e}")

    if file_path is None:
        _inventory_cache = items
    return items


def get_sports(file_path: Optional[str] = None) -> List[str]:
    """Sports offered in the booking form, falling back to DEFAULT_SPORTS."""
    sports = _load(file_path or EVENTS_FILE).get("sports")
    if isinstance(sports, list):
        names = [str(s).strip() for s in sports if str(s).strip()]
        if names:
            return names
    return list(DEFAULT_SPORTS)
