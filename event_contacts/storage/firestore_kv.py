"""Firestore-backed key-value storage."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Optional

from .base import StorageError


class FirestoreStorage:
    """One Firestore document per key, ``{"value": text, "updated_at": iso}``."""

    name = "firestore"

    def __init__(self, db: Any, collection: str = "kv_store") -> None:
        self._db = db
        self.collection = collection

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    def _get(self, key: str) -> Optional[str]:
        try:
            doc = self._db.collection(self.collection).document(key).get()
        except Exception as exc:  # network/auth path
            raise StorageError(f"Firestore read failed for {key!r}: {exc}") from exc

        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        value = data.get("value")
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageError(f"Firestore document {key!r} has a non-text value")
        return value

    def _set(self, key: str, value: str) -> None:
        payload = {
            "value": value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self._db.collection(self.collection).document(key).set(payload)
        except Exception as exc:  # network/auth path
            raise StorageError(f"Firestore write failed for {key!r}: {exc}") from exc
