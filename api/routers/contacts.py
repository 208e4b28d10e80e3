"""Contacts Router - list, delete, and the pending add-contact form.

Handles:
- Contact listing in insertion order
- Delete by id (unknown ids are a no-op)
- Pending form read/update and submit
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from api.dependencies import (
    get_screen,
    serialize_contact,
    serialize_contact_list,
    serialize_form,
)
from event_contacts.contacts import ContactValidationError
from event_contacts.screen import ContactScreen

logger = logging.getLogger(__name__)

# Contact list router (mounted at /contacts)
router = APIRouter()

# Pending form router (mounted at /form)
form_router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class FormUpdateRequest(BaseModel):
    """Partial update of the pending form. Omitted fields keep their value."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    qr_code: Optional[str] = Field(None, alias="qrCode")


# =============================================================================
# Contact Endpoints
# =============================================================================

@router.get("")
async def list_contacts(screen: ContactScreen = Depends(get_screen)) -> dict:
    return serialize_contact_list(screen)


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: str,
    screen: ContactScreen = Depends(get_screen),
) -> dict:
    deleted = screen.delete(contact_id)
    if not deleted:
        logger.info(f"[Contacts] Delete for unknown id {contact_id}")
    body = serialize_contact_list(screen)
    body["deleted"] = deleted
    return body


# =============================================================================
# Form Endpoints
# =============================================================================

@form_router.get("")
async def get_form(screen: ContactScreen = Depends(get_screen)) -> dict:
    return serialize_form(screen.form)


@form_router.patch("")
async def update_form(
    request: FormUpdateRequest,
    screen: ContactScreen = Depends(get_screen),
) -> dict:
    screen.update_form(**request.model_dump(exclude_none=True))
    return serialize_form(screen.form)


@form_router.post("/submit", status_code=201)
async def submit_form(screen: ContactScreen = Depends(get_screen)) -> dict:
    try:
        contact = screen.submit()
    except ContactValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "contact": serialize_contact(contact),
        "form": serialize_form(screen.form),
    }
