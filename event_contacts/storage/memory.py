"""In-memory key-value storage (tests and throwaway sessions)."""
from __future__ import annotations

from typing import Dict, Optional


class MemoryStorage:
    """Dict-backed storage. Values vanish with the process."""

    name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)
