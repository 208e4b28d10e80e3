"""In-memory contact collection mirrored to key-value storage."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Set

from ..config import DEFAULT_CONTACTS_KEY
from ..storage import KeyValueStorage
from .model import (
    Contact,
    ContactForm,
    CorruptCollectionError,
    build_contact,
    decode_contacts,
    encode_contacts,
    new_contact_id,
)

logger = logging.getLogger(__name__)


class ContactStore:
    """Ordered contacts owned in memory; storage is a passive mirror.

    Mutations apply immediately and schedule a write of the whole collection
    on the running event loop. Writes are chained so they land in mutation
    order, and ``flush()`` waits for the ones still in flight.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_CONTACTS_KEY,
        id_factory: Callable[[], str] = new_contact_id,
    ) -> None:
        self.storage = storage
        self.key = key
        self._id_factory = id_factory
        self._contacts: List[Contact] = []
        self._issued_ids: Set[str] = set()
        self._pending: Set[asyncio.Task] = set()
        self._last_write: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._contacts)

    async def load(self) -> List[Contact]:
        """Read the stored collection once at startup.

        Never raises: a failed read or an unreadable value leaves the store
        empty.
        """
        try:
            text = await self.storage.get(self.key)
        except Exception as exc:
            logger.error(f"[Contacts] Error loading contacts from {self.storage.name}: {exc}")
            self._contacts = []
            return self.list()

        if text is None:
            logger.debug(f"[Contacts] No stored contacts under {self.key!r}")
            self._contacts = []
            return self.list()

        try:
            contacts = decode_contacts(text)
        except CorruptCollectionError as exc:
            logger.warning(
                f"[Contacts] Stored contacts under {self.key!r} are unreadable, "
                f"starting empty: {exc}"
            )
            contacts = []

        self._contacts = contacts
        self._issued_ids.update(c.id for c in contacts)
        logger.info(f"[Contacts] Loaded {len(contacts)} contact(s)")
        return self.list()

    def list(self) -> List[Contact]:
        return list(self._contacts)

    def get(self, contact_id: str) -> Optional[Contact]:
        return next((c for c in self._contacts if c.id == contact_id), None)

    def add(self, form: ContactForm) -> Contact:
        """Append a contact built from ``form`` and schedule a write.

        Raises:
            ContactValidationError: if the name is blank. Nothing changes.
        """
        contact = build_contact(form, self._next_id())
        self._contacts = [*self._contacts, contact]
        self._issued_ids.add(contact.id)
        self.persist(self._contacts)
        return contact

    def delete(self, contact_id: str) -> bool:
        """Remove the contact with ``contact_id``. Unknown ids are a no-op."""
        remaining = [c for c in self._contacts if c.id != contact_id]
        removed = len(remaining) != len(self._contacts)
        self._contacts = remaining
        self.persist(self._contacts)
        return removed

    def persist(self, contacts: List[Contact]) -> asyncio.Task:
        """Schedule a write of ``contacts`` and return the write task.

        Must be called from the event loop thread.
        """
        text = encode_contacts(contacts)
        previous = self._last_write
        task = asyncio.get_running_loop().create_task(self._write(text, previous))
        self._last_write = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def flush(self) -> None:
        """Wait until every scheduled write has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _write(self, text: str, previous: Optional[asyncio.Task]) -> bool:
        if previous is not None:
            await asyncio.gather(previous, return_exceptions=True)
        try:
            await self.storage.set(self.key, text)
        except Exception as exc:
            logger.error(f"[Contacts] Error saving contacts to {self.storage.name}: {exc}")
            return False
        return True

    def _next_id(self) -> str:
        contact_id = self._id_factory()
        while contact_id in self._issued_ids:
            contact_id = self._id_factory()
        return contact_id
