"""Persistence adapters for the contact collection."""
from __future__ import annotations

import logging

from ..config import Settings
from ..firestore import get_firestore_client
from .base import KeyValueStorage, StorageError
from .files import FileStorage
from .firestore_kv import FirestoreStorage
from .memory import MemoryStorage

logger = logging.getLogger(__name__)

__all__ = [
    "KeyValueStorage",
    "StorageError",
    "MemoryStorage",
    "FileStorage",
    "FirestoreStorage",
    "build_storage",
]


def build_storage(settings: Settings) -> KeyValueStorage:
    """Return the adapter selected by ``settings.storage_backend``.

    Firestore falls back to local files when the client cannot be created.
    """

    if settings.storage_backend == "memory":
        return MemoryStorage()

    if settings.storage_backend == "firestore":
        try:
            db = get_firestore_client(settings.firestore_project)
        except Exception as exc:
            logger.error(
                f"[Storage] Firestore unavailable, falling back to local files: {exc}"
            )
        else:
            return FirestoreStorage(db, collection=settings.firestore_collection)

    return FileStorage(settings.storage_dir)
