"""Contact records, the pending form, and the stored collection format."""
from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, List


class ContactValidationError(ValueError):
    """Raised when a form cannot become a contact. The message is user-facing."""


class CorruptCollectionError(ValueError):
    """Raised when a stored collection cannot be decoded."""


def new_contact_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Contact:
    """A saved contact. Immutable once created."""
    id: str
    name: str
    email: str = ""
    phone: str = ""
    notes: str = ""
    qr_code: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "notes": self.notes,
            "qrCode": self.qr_code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Contact:
        """Build a contact from its stored form.

        Raises:
            CorruptCollectionError: if ``id``/``name`` are missing or any field
                is not text.
        """
        if not isinstance(data, dict):
            raise CorruptCollectionError(f"Contact entry is not an object: {data!r}")

        contact_id = data.get("id")
        name = data.get("name")
        if not isinstance(contact_id, str) or not contact_id:
            raise CorruptCollectionError("Contact entry is missing an id")
        if not isinstance(name, str) or not name.strip():
            raise CorruptCollectionError(f"Contact {contact_id} is missing a name")

        optional = {}
        for attr, wire_key in (
            ("email", "email"),
            ("phone", "phone"),
            ("notes", "notes"),
            ("qr_code", "qrCode"),
        ):
            value = data.get(wire_key)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise CorruptCollectionError(
                    f"Contact {contact_id} field {wire_key!r} is not text"
                )
            optional[attr] = value

        return cls(id=contact_id, name=name, **optional)


@dataclass
class ContactForm:
    """Pending input for a new contact, filled in by the UI or a scan."""
    name: str = ""
    email: str = ""
    phone: str = ""
    notes: str = ""
    qr_code: str = ""

    def clear(self) -> None:
        for f in fields(self):
            setattr(self, f.name, "")

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "notes": self.notes,
            "qrCode": self.qr_code,
        }


def build_contact(form: ContactForm, contact_id: str) -> Contact:
    """Validate a form and turn it into a contact.

    Raises:
        ContactValidationError: if the name is empty or only whitespace.
    """
    if not (form.name or "").strip():
        raise ContactValidationError("Name is required")

    return Contact(
        id=contact_id,
        name=form.name,
        email=form.email or "",
        phone=form.phone or "",
        notes=form.notes or "",
        qr_code=form.qr_code or "",
    )


def encode_contacts(contacts: Iterable[Contact]) -> str:
    """Serialize contacts, in order, to the stored JSON text.

    The result is pure ASCII; lone surrogates survive as \\u escapes.
    """
    return json.dumps([c.to_dict() for c in contacts])


def decode_contacts(text: str) -> List[Contact]:
    """Parse stored JSON text back into an ordered contact list.

    Raises:
        CorruptCollectionError: on invalid JSON, a non-list payload, a bad
            entry, or duplicate ids.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise CorruptCollectionError(f"Stored contacts are not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise CorruptCollectionError(
            f"Stored contacts must be a list, got {type(data).__name__}"
        )

    contacts = [Contact.from_dict(item) for item in data]

    seen: set[str] = set()
    for contact in contacts:
        if contact.id in seen:
            raise CorruptCollectionError(f"Duplicate contact id {contact.id}")
        seen.add(contact.id)

    return contacts
