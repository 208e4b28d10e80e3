"""Tests for the cached Firestore client helper."""
from __future__ import annotations

import sys
import types
from unittest.mock import MagicMock

import pytest

from event_contacts import firestore as firestore_helper


@pytest.fixture
def fake_firebase(monkeypatch):
    firestore_module = types.SimpleNamespace(client=MagicMock(return_value="client"))
    firebase_admin = types.ModuleType("firebase_admin")
    firebase_admin._apps = {}
    firebase_admin.initialize_app = MagicMock()
    firebase_admin.firestore = firestore_module
    monkeypatch.setitem(sys.modules, "firebase_admin", firebase_admin)
    monkeypatch.setitem(sys.modules, "firebase_admin.firestore", firestore_module)
    firestore_helper.reset_firestore_client()
    yield firebase_admin
    firestore_helper.reset_firestore_client()


def test_client_is_initialized_once(fake_firebase):
    first = firestore_helper.get_firestore_client()
    second = firestore_helper.get_firestore_client()

    assert first == "client"
    assert second == "client"
    fake_firebase.initialize_app.assert_called_once()
    fake_firebase.firestore.client.assert_called_once()


def test_project_id_is_passed_to_firebase(fake_firebase):
    firestore_helper.get_firestore_client("event-contacts-dev")

    fake_firebase.initialize_app.assert_called_once_with(
        options={"projectId": "event-contacts-dev"}
    )
