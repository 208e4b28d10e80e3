"""The contact screen: pending form, list rendering, and UI event wiring."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .contacts import Contact, ContactForm, ContactStore
from .scan import PermissionState, ScanCapture, ScanEvent, ScannerService

SCREEN_TITLE = "Networking Event Contacts"
FORM_FIELDS = ("name", "email", "phone", "notes", "qr_code")


@dataclass
class ContactRow:
    """What one list item shows: the name, then whichever details are set."""
    id: str
    name: str
    details: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "details": list(self.details)}


def render_row(contact: Contact) -> ContactRow:
    details = [value for value in (contact.email, contact.phone, contact.notes) if value]
    return ContactRow(id=contact.id, name=contact.name, details=details)


def format_contact_rows(contacts: Iterable[Contact]) -> str:
    """Return a plain-text listing, one block per contact."""

    lines: List[str] = []
    for contact in contacts:
        row = render_row(contact)
        lines.append(f"{row.name}  [{row.id}]")
        lines.extend(f"    {detail}" for detail in row.details)
        if contact.qr_code:
            lines.append(f"    QR: {contact.qr_code}")
    return "\n".join(lines)


class ContactScreen:
    """Routes form submits, delete taps and scan results to the store."""

    title = SCREEN_TITLE

    def __init__(self, store: ContactStore, scanner: Optional[ScannerService] = None) -> None:
        self.store = store
        self.form = ContactForm()
        self.scan = ScanCapture(self.form, scanner)

    async def start(self) -> List[Contact]:
        """Load stored contacts and ask for camera access.

        Without a scanner service the permission stays unknown until a front
        end reports it through ``record_permission``.
        """
        contacts = await self.store.load()
        if self.scan.scanner is not None:
            await self.scan.request_permission()
        return contacts

    def update_form(self, **values: Optional[str]) -> ContactForm:
        for name, value in values.items():
            if name not in FORM_FIELDS:
                raise TypeError(f"Unknown form field: {name}")
            if value is not None:
                setattr(self.form, name, value)
        return self.form

    def submit(self) -> Contact:
        """Add the pending form as a contact and clear it.

        Raises:
            ContactValidationError: the form is kept as typed.
        """
        contact = self.store.add(self.form)
        self.form.clear()
        return contact

    def delete(self, contact_id: str) -> bool:
        return self.store.delete(contact_id)

    def on_scan(self, event: ScanEvent) -> bool:
        return self.scan.handle_scan(event)

    def record_permission(self, granted: bool) -> PermissionState:
        return self.scan.record_permission(granted)

    def render_rows(self) -> List[ContactRow]:
        return [render_row(contact) for contact in self.store.list()]
