"""Application settings loaded from the environment and an optional .env file."""
import os
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Optional


DEFAULT_API_BASE = "http://localhost:5000/api"
DEFAULT_STORE_FILE = "data/local_store.json"
DEFAULT_EVENTS_FILE = "data/events.json"

SETTING_KEYS = {
    "SAS_API_BASE",
    "SAS_STORE_FILE",
    "SAS_EVENTS_FILE",
    "SAS_HTTP_TIMEOUT",
    "SAS_LOG_LEVEL",
}

_ENV_LOADED = False
_ENV_LOCK = Lock()


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    api_base: str = DEFAULT_API_BASE
    store_file: str = DEFAULT_STORE_FILE
    events_file: str = DEFAULT_EVENTS_FILE
    http_timeout: Optional[float] = None
    log_level: str = "INFO"


def _load_env_file(env_path: Path = Path(".env")) -> None:
    """Load SAS_* settings from .env file if present."""
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        if env_path.exists():
            for raw_line in env_path.read_text(encoding="utf-8").splitlines():
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"\'')

                if key in SETTING_KEYS and key not in os.environ:
                    os.environ[key] = value

        _ENV_LOADED = True


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"SAS_HTTP_TIMEOUT must be a number: {raw}")
    if timeout <= 0:
        raise ValueError(f"SAS_HTTP_TIMEOUT must be positive: {raw}")
    return timeout


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Returns:
        Settings populated from SAS_* variables, falling back to defaults

    Raises:
        ValueError: If SAS_HTTP_TIMEOUT is set but not a positive number

    Behavior:
        - Reads .env once per process; variables already in the environment win
        - Strips a trailing slash from SAS_API_BASE
    """
    _load_env_file()

    return Settings(
        api_base=os.getenv("SAS_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        store_file=os.getenv("SAS_STORE_FILE", DEFAULT_STORE_FILE),
        events_file=os.getenv("SAS_EVENTS_FILE", DEFAULT_EVENTS_FILE),
        http_timeout=_parse_timeout(os.getenv("SAS_HTTP_TIMEOUT")),
        log_level=os.getenv("SAS_LOG_LEVEL", "INFO").upper(),
    )
