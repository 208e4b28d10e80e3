import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from event_contacts.contacts import ContactForm  # noqa: E402
from event_contacts.storage import MemoryStorage, StorageError  # noqa: E402


class FailingStorage:
    """Storage whose reads and/or writes always fail."""

    name = "failing"

    def __init__(self, fail_get: bool = True, fail_set: bool = True) -> None:
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.set_calls = 0

    async def get(self, key):
        if self.fail_get:
            raise StorageError("disk unavailable")
        return None

    async def set(self, key, value):
        self.set_calls += 1
        if self.fail_set:
            raise StorageError("disk full")


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def make_form():
    def _make(name="", **kwargs):
        return ContactForm(name=name, **kwargs)
    return _make


@pytest.fixture
def sequential_ids():
    """An id factory producing id-1, id-2, ..."""
    counter = {"n": 0}

    def _next():
        counter["n"] += 1
        return f"id-{counter['n']}"
    return _next
