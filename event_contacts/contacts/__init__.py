"""Contact records and the persistent contact store."""
from .model import (
    Contact,
    ContactForm,
    ContactValidationError,
    CorruptCollectionError,
    build_contact,
    decode_contacts,
    encode_contacts,
    new_contact_id,
)
from .store import ContactStore

__all__ = [
    # Records
    "Contact",
    "ContactForm",
    "ContactValidationError",
    "CorruptCollectionError",
    "build_contact",
    "new_contact_id",
    # Stored format
    "encode_contacts",
    "decode_contacts",
    # Store
    "ContactStore",
]
