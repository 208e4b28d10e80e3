"""Shared dependencies and helper functions for API routers.

Usage in routers:
    from api.dependencies import get_screen, serialize_contact
"""
from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException, Request

from event_contacts.config import Settings, load_settings
from event_contacts.contacts import Contact, ContactForm
from event_contacts.screen import ContactScreen


# =============================================================================
# Cached Functions
# =============================================================================

@lru_cache
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return load_settings()


def get_screen(request: Request) -> ContactScreen:
    """Return the screen created at startup."""
    screen = getattr(request.app.state, "screen", None)
    if screen is None:
        raise HTTPException(status_code=503, detail="Contact store is not loaded yet.")
    return screen


# =============================================================================
# Serialization Helpers
# =============================================================================

def serialize_contact(contact: Contact) -> dict:
    """Serialize a Contact to API response format (same keys as storage)."""
    return contact.to_dict()


def serialize_form(form: ContactForm) -> dict:
    return form.to_dict()


def serialize_contact_list(screen: ContactScreen) -> dict:
    return {
        "title": screen.title,
        "contacts": [serialize_contact(c) for c in screen.store.list()],
        "rows": [row.to_dict() for row in screen.render_rows()],
    }
