"""Scan capture for pre-filling the contact form."""
from .capture import (
    DENIED_MESSAGE,
    REQUESTING_MESSAGE,
    PermissionState,
    ScanCapture,
    ScanEvent,
    ScannerService,
)

__all__ = [
    "PermissionState",
    "ScanCapture",
    "ScanEvent",
    "ScannerService",
    "REQUESTING_MESSAGE",
    "DENIED_MESSAGE",
]
