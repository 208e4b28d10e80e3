"""Configuration helpers for the Event Contacts screen."""
from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Optional

STORAGE_BACKENDS = ("memory", "file", "firestore")
DEFAULT_CONTACTS_KEY = "contacts"


class ConfigError(RuntimeError):
    """Raised when configuration values are invalid."""


def _default_storage_dir() -> Path:
    data_home = Path(os.path.expanduser(os.getenv("XDG_DATA_HOME") or "~/.local/share"))
    return (data_home / "event-contacts").resolve()


@dataclass(slots=True)
class Settings:
    """Runtime configuration shared by the API and the CLI."""

    storage_backend: str = "file"
    storage_dir: Path = field(default_factory=_default_storage_dir)
    contacts_key: str = DEFAULT_CONTACTS_KEY
    firestore_collection: str = "kv_store"
    firestore_project: Optional[str] = None
    environment: str = "local"
    log_level: str = "WARNING"


def load_settings() -> Settings:
    """Load settings from environment variables.

    Raises:
        ConfigError: if EC_STORAGE_BACKEND names an unknown backend.
    """

    backend = os.getenv("EC_STORAGE_BACKEND", "file").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ConfigError(
            f"Unknown storage backend {backend!r}. "
            f"Set EC_STORAGE_BACKEND to one of: {', '.join(STORAGE_BACKENDS)}."
        )

    storage_dir = os.getenv("EC_STORAGE_DIR")
    key = (os.getenv("EC_CONTACTS_KEY") or "").strip()

    return Settings(
        storage_backend=backend,
        storage_dir=Path(storage_dir) if storage_dir else _default_storage_dir(),
        contacts_key=key or DEFAULT_CONTACTS_KEY,
        firestore_collection=os.getenv("EC_FIRESTORE_COLLECTION", "kv_store"),
        firestore_project=os.getenv("EC_FIRESTORE_PROJECT") or None,
        environment=os.getenv("EC_ENV", "local"),
        log_level=os.getenv("EC_LOG_LEVEL", "WARNING").upper(),
    )
