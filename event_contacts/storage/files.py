"""Local JSON file storage, one file per key."""
from __future__ import annotations

import asyncio
import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .base import StorageError


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class FileStorage:
    """Stores each key as ``<directory>/<key>.json``.

    The file holds ``{"key", "value", "updated_at"}`` and is replaced
    atomically so a crash mid-write never leaves a truncated value behind.
    """

    name = "file"

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self.directory / f"{safe_key}.json"

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)

    def _read(self, key: str) -> Optional[str]:
        filepath = self.path_for(key)
        if not filepath.exists():
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            raise StorageError(f"Unable to read {filepath}: {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("value"), str):
            raise StorageError(f"Unexpected layout in {filepath}")
        return data["value"]

    def _write(self, key: str, value: str) -> None:
        filepath = self.path_for(key)
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            tmp_fd, tmp_name = tempfile.mkstemp(
                prefix=f"{filepath.stem}_", suffix=".json", dir=str(filepath.parent)
            )
        except OSError as exc:
            raise StorageError(f"Unable to write {filepath}: {exc}") from exc

        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
                json.dump(
                    {"key": key, "value": value, "updated_at": _now()},
                    f,
                    ensure_ascii=False,
                    indent=2,
                )
                f.write("\n")
            Path(tmp_name).replace(filepath)
        except OSError as exc:
            raise StorageError(f"Unable to write {filepath}: {exc}") from exc
        finally:
            Path(tmp_name).unlink(missing_ok=True)
