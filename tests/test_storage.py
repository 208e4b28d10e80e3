"""Tests for the key-value storage adapters."""
from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from event_contacts.config import Settings
from event_contacts.storage import (
    FileStorage,
    FirestoreStorage,
    MemoryStorage,
    StorageError,
    build_storage,
)


# =============================================================================
# MemoryStorage
# =============================================================================

class TestMemoryStorage:

    @pytest.mark.asyncio
    async def test_get_missing_key(self):
        assert await MemoryStorage().get("contacts") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self):
        storage = MemoryStorage()

        await storage.set("contacts", "[]")

        assert await storage.get("contacts") == "[]"

    @pytest.mark.asyncio
    async def test_last_write_wins(self):
        storage = MemoryStorage({"contacts": "old"})

        await storage.set("contacts", "new")

        assert storage.snapshot() == {"contacts": "new"}


# =============================================================================
# FileStorage
# =============================================================================

class TestFileStorage:

    @pytest.mark.asyncio
    async def test_get_missing_file(self, tmp_path):
        storage = FileStorage(tmp_path / "data")

        assert await storage.get("contacts") is None

    @pytest.mark.asyncio
    async def test_set_creates_directory_and_file(self, tmp_path):
        directory = tmp_path / "data"
        storage = FileStorage(directory)

        await storage.set("contacts", '[{"id": "a"}]')

        stored = json.loads((directory / "contacts.json").read_text(encoding="utf-8"))
        assert stored["key"] == "contacts"
        assert stored["value"] == '[{"id": "a"}]'
        assert stored["updated_at"]

    @pytest.mark.asyncio
    async def test_round_trip_unicode(self, tmp_path):
        storage = FileStorage(tmp_path)

        await storage.set("contacts", "Zoë — café")

        assert await storage.get("contacts") == "Zoë — café"

    @pytest.mark.asyncio
    async def test_overwrite_leaves_no_temp_files(self, tmp_path):
        storage = FileStorage(tmp_path)

        await storage.set("contacts", "one")
        await storage.set("contacts", "two")

        assert await storage.get("contacts") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["contacts.json"]

    def test_key_is_sanitized(self, tmp_path):
        storage = FileStorage(tmp_path)

        assert storage.path_for("../contacts").parent == tmp_path

    @pytest.mark.asyncio
    async def test_unreadable_file_raises_storage_error(self, tmp_path):
        (tmp_path / "contacts.json").write_text("{broken", encoding="utf-8")
        storage = FileStorage(tmp_path)

        with pytest.raises(StorageError):
            await storage.get("contacts")

    @pytest.mark.asyncio
    async def test_unexpected_layout_raises_storage_error(self, tmp_path):
        (tmp_path / "contacts.json").write_text('["not", "wrapped"]', encoding="utf-8")
        storage = FileStorage(tmp_path)

        with pytest.raises(StorageError):
            await storage.get("contacts")

    @pytest.mark.asyncio
    async def test_write_into_file_path_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        storage = FileStorage(blocker / "data")

        with pytest.raises(StorageError):
            await storage.set("contacts", "[]")


# =============================================================================
# FirestoreStorage
# =============================================================================

def _mock_db(exists=True, data=None):
    db = MagicMock()
    doc = MagicMock()
    doc.exists = exists
    doc.to_dict.return_value = data
    db.collection.return_value.document.return_value.get.return_value = doc
    return db


class TestFirestoreStorage:

    @pytest.mark.asyncio
    async def test_get_reads_value_field(self):
        db = _mock_db(data={"value": "[]", "updated_at": "2024-01-01T00:00:00+00:00"})
        storage = FirestoreStorage(db, collection="kv_store")

        assert await storage.get("contacts") == "[]"
        db.collection.assert_called_with("kv_store")
        db.collection.return_value.document.assert_called_with("contacts")

    @pytest.mark.asyncio
    async def test_get_missing_document(self):
        storage = FirestoreStorage(_mock_db(exists=False))

        assert await storage.get("contacts") is None

    @pytest.mark.asyncio
    async def test_get_non_text_value_raises(self):
        storage = FirestoreStorage(_mock_db(data={"value": [1, 2]}))

        with pytest.raises(StorageError):
            await storage.get("contacts")

    @pytest.mark.asyncio
    async def test_set_writes_value_document(self):
        db = _mock_db()
        storage = FirestoreStorage(db)

        await storage.set("contacts", "[]")

        doc_ref = db.collection.return_value.document.return_value
        payload = doc_ref.set.call_args.args[0]
        assert payload["value"] == "[]"
        assert "updated_at" in payload

    @pytest.mark.asyncio
    async def test_client_errors_become_storage_errors(self):
        db = MagicMock()
        db.collection.return_value.document.return_value.get.side_effect = RuntimeError("offline")
        db.collection.return_value.document.return_value.set.side_effect = RuntimeError("offline")
        storage = FirestoreStorage(db)

        with pytest.raises(StorageError, match="offline"):
            await storage.get("contacts")
        with pytest.raises(StorageError, match="offline"):
            await storage.set("contacts", "[]")


# =============================================================================
# build_storage
# =============================================================================

class TestBuildStorage:

    def test_memory_backend(self):
        assert isinstance(build_storage(Settings(storage_backend="memory")), MemoryStorage)

    def test_file_backend(self, tmp_path):
        storage = build_storage(Settings(storage_backend="file", storage_dir=tmp_path))

        assert isinstance(storage, FileStorage)
        assert storage.directory == tmp_path

    def test_firestore_backend(self):
        db = MagicMock()
        with patch("event_contacts.storage.get_firestore_client", return_value=db):
            storage = build_storage(
                Settings(storage_backend="firestore", firestore_collection="event_kv")
            )

        assert isinstance(storage, FirestoreStorage)
        assert storage.collection == "event_kv"

    def test_firestore_unavailable_falls_back_to_files(self, tmp_path):
        with patch(
            "event_contacts.storage.get_firestore_client",
            side_effect=RuntimeError("firebase-admin is required"),
        ):
            storage = build_storage(
                Settings(storage_backend="firestore", storage_dir=tmp_path)
            )

        assert isinstance(storage, FileStorage)
