"""Camera scan capture: permission gate plus form pre-fill."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from ..contacts import ContactForm

logger = logging.getLogger(__name__)

REQUESTING_MESSAGE = "Requesting camera permission"
DENIED_MESSAGE = "No access to camera"


class PermissionState(str, Enum):
    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True)
class ScanEvent:
    """A decoded code. ``type`` is the symbology and is not used."""
    data: str
    type: str = ""


class ScannerService(Protocol):
    async def request_permission(self) -> bool:
        """Prompt once for camera access and report whether it was granted."""
        ...


class ScanCapture:
    """Writes scanned payloads into a pending form once access is granted."""

    def __init__(self, form: ContactForm, scanner: Optional[ScannerService] = None) -> None:
        self.form = form
        self.scanner = scanner
        self.permission = PermissionState.UNKNOWN

    @property
    def available(self) -> bool:
        return self.permission is PermissionState.GRANTED

    @property
    def message(self) -> Optional[str]:
        """Inline status text for the screen, or None when scanning works."""
        if self.permission is PermissionState.UNKNOWN:
            return REQUESTING_MESSAGE
        if self.permission is PermissionState.DENIED:
            return DENIED_MESSAGE
        return None

    async def request_permission(self) -> PermissionState:
        """Ask the scanner service for access. Only the first answer counts."""
        if self.permission is not PermissionState.UNKNOWN:
            return self.permission
        if self.scanner is None:
            logger.info("[Scan] No scanner service configured")
            self.record_permission(False)
            return self.permission

        try:
            granted = await self.scanner.request_permission()
        except Exception as exc:
            logger.error(f"[Scan] Permission request failed: {exc}")
            granted = False
        self.record_permission(granted)
        return self.permission

    def record_permission(self, granted: bool) -> PermissionState:
        """Store the outcome of a permission prompt answered elsewhere."""
        self.permission = PermissionState.GRANTED if granted else PermissionState.DENIED
        if not granted:
            logger.info("[Scan] Camera permission denied; scanning unavailable")
        return self.permission

    def handle_scan(self, event: ScanEvent) -> bool:
        """Copy the payload into ``form.qr_code``, replacing any earlier scan."""
        if not self.available:
            logger.warning(
                f"[Scan] Ignoring scan while permission is {self.permission.value}"
            )
            return False
        self.form.qr_code = event.data
        return True
