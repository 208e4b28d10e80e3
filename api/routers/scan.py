"""Scan Router - camera permission outcome and scan results."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dependencies import get_screen, serialize_form
from event_contacts.scan import ScanEvent
from event_contacts.screen import ContactScreen

router = APIRouter()


class PermissionRequest(BaseModel):
    granted: bool


class ScanRequest(BaseModel):
    data: str
    type: str = Field("", description="Symbology reported by the scanner; ignored.")


def _scan_status(screen: ContactScreen) -> dict:
    return {
        "permission": screen.scan.permission.value,
        "message": screen.scan.message,
    }


@router.get("")
async def scan_status(screen: ContactScreen = Depends(get_screen)) -> dict:
    return _scan_status(screen)


@router.post("/permission")
async def record_permission(
    request: PermissionRequest,
    screen: ContactScreen = Depends(get_screen),
) -> dict:
    screen.record_permission(request.granted)
    return _scan_status(screen)


@router.post("")
async def scan_code(
    request: ScanRequest,
    screen: ContactScreen = Depends(get_screen),
) -> dict:
    accepted = screen.on_scan(ScanEvent(data=request.data, type=request.type))
    body = _scan_status(screen)
    body["accepted"] = accepted
    body["form"] = serialize_form(screen.form)
    return body
