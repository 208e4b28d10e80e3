"""Asynchronous key-value storage contract."""
from __future__ import annotations

from typing import Optional, Protocol


class StorageError(RuntimeError):
    """Raised by adapters when a read or write cannot be completed."""


class KeyValueStorage(Protocol):
    """Durable text values addressed by a string key."""

    name: str

    async def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None when the key has never been set."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""
        ...
