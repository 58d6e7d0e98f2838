"""Local key-value persistence: JSON file I/O, store backends and the list adapter."""
import json
import logging
import os
import sys
import tempfile
import time
import shutil
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Protocol

from sportshub.utils.exceptions import FileWriteError

if sys.platform != "win32":
    import fcntl

logger = logging.getLogger(__name__)

# Namespaced keys shared with the browser build of the site
STORAGE_KEYS = {
    "bookings": "sas_bookings_v1",
    "registrations": "sas_registrations_v1",
}
USER_KEY = "user"
DEFAULT_USER = "guest"
LOCK_POLL_INTERVAL = 0.05


def load_json(file_path: str) -> Any:
    """
    Parse a UTF-8 JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not UTF-8 or not JSON (json.JSONDecodeError
            and UnicodeDecodeError both derive from ValueError)
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def save_json(file_path: str, data: Dict[str, Any], backup: bool = True) -> None:
    """
    Replace a JSON file atomically.

    The document is written to a temp file in the same directory and moved
    over the target with os.replace, so readers see the old or the new
    content and never a partial one.

    Args:
        file_path: Path to JSON file
        data: Dictionary to save
        backup: If True, copy the previous file to <file>.backup first

    Raises:
        IOError: If the backup or the write fails
    """
    dir_path = os.path.dirname(file_path) or "."
    os.makedirs(dir_path, exist_ok=True)

    if backup and os.path.exists(file_path):
        try:
            shutil.copy2(file_path, f"{file_path}.backup")
        except OSError as e:
            raise IOError(f"Failed to create backup: {e}")

    temp_fd, temp_path = tempfile.mkstemp(dir=dir_path, prefix=".tmp_", suffix=".json")
    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, file_path)
    except (OSError, TypeError, ValueError) as e:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError:
                logger.warning("Could not remove temp file %s", temp_path)
        raise IOError(f"Failed to write file {file_path}: {e}")


def _poll(try_acquire, file_path: str, timeout: float) -> None:
    deadline = time.monotonic() + timeout
    while not try_acquire():
        if time.monotonic() > deadline:
            raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
        time.sleep(LOCK_POLL_INTERVAL)


@contextmanager
def lock_file(file_path: str, timeout: float = 5.0):
    """
    Hold an exclusive advisory lock on an existing file.

    Uses flock where available and a <file>.lock marker file elsewhere.

    Raises:
        TimeoutError: If unable to acquire lock within timeout
        FileNotFoundError: If file doesn't exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Cannot lock non-existent file: {file_path}")

    if sys.platform == "win32":
        marker = f"{file_path}.lock"

        def try_marker() -> bool:
            try:
                os.close(os.open(marker, os.O_CREAT | os.O_EXCL | os.O_RDWR))
            except FileExistsError:
                return False
            return True

        _poll(try_marker, file_path, timeout)
        try:
            yield
        finally:
            os.remove(marker)
        return

    with open(file_path, "r+") as handle:
        def try_flock() -> bool:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            except OSError:
                return False
            return True

        _poll(try_flock, file_path, timeout)
        try:
            yield
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


class KeyValueStore(Protocol):
    """String-valued key-value store (the shape of browser localStorage)."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-process store, used by tests and as a scratch backend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None, fail_writes: bool = False):
        self.items: Dict[str, str] = dict(initial or {})
        self.fail_writes = fail_writes

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise IOError("Store is read-only")
        self.items[key] = value


class JsonFileStore:
    """
    Persistent store backed by a single JSON document.

    The document maps each key to its serialized string value. Writes go
    through lock_file + save_json so a crash never leaves a half-written file.
    """

    def __init__(self, file_path: str, backup: bool = True):
        self.file_path = file_path
        self.backup = backup

    def _ensure_file(self) -> None:
        if not os.path.exists(self.file_path):
            save_json(self.file_path, {}, backup=False)

    def get_item(self, key: str) -> Optional[str]:
        try:
            data = load_json(self.file_path)
        except FileNotFoundError:
            return None
        except ValueError as e:
            logger.warning("Local store %s is unreadable: %s", self.file_path, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Local store %s is not a JSON object", self.file_path)
            return None

        value = data.get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        self._ensure_file()
        with lock_file(self.file_path):
            try:
                data = load_json(self.file_path)
            except ValueError:
                logger.warning("Overwriting unreadable local store %s", self.file_path)
                data = {}
            if not isinstance(data, dict):
                data = {}
            data[key] = value
            save_json(self.file_path, data, backup=self.backup)


class LocalStoreAdapter:
    """List-valued view over a KeyValueStore with forgiving reads."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def read(self, key: str) -> List[Any]:
        """
        Read a persisted collection.

        Args:
            key: Storage key (see STORAGE_KEYS)

        Returns:
            List stored under key; [] when missing, malformed or not a list

        Behavior:
            - Never raises for bad data; logs a diagnostic instead
        """
        try:
            raw = self.store.get_item(key)
        except (OSError, TimeoutError, ValueError) as e:
            logger.warning("Could not read %s from local store: %s", key, e)
            return []

        if raw is None:
            return []

        try:
            value = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Discarding malformed data under %s: %s", key, e)
            return []

        if not isinstance(value, list):
            logger.debug("Expected a list under %s, got %s", key, type(value).__name__)
            return []

        return value

    def write(self, key: str, items: List[Any]) -> None:
        """
        Serialize and persist a collection.

        Raises:
            FileWriteError: If the store rejects the write
        """
        payload = json.dumps(list(items), ensure_ascii=False)
        try:
            self.store.set_item(key, payload)
        except (OSError, TimeoutError) as e:
            logger.error(f"Failed to persist {key}: {e}")
            raise FileWriteError(f"Could not save {key}: {e}") from e

    def get_user(self) -> str:
        """Return the current user identity, "guest" when none is stored."""
        try:
            user = self.store.get_item(USER_KEY)
        except (OSError, TimeoutError, ValueError):
            return DEFAULT_USER
        return user or DEFAULT_USER
