"""API Routers Package.

Routers:
- contacts.py: contact list and delete (/contacts), pending form (/form)
- scan.py: camera permission and scan results (/scan)

Usage in main.py:
    from api.routers import contacts_router, form_router, scan_router

    app.include_router(contacts_router, prefix="/contacts", tags=["contacts"])
    app.include_router(form_router, prefix="/form", tags=["form"])
    app.include_router(scan_router, prefix="/scan", tags=["scan"])
"""

from .contacts import router as contacts_router
from .contacts import form_router
from .scan import router as scan_router

__all__ = [
    "contacts_router",
    "form_router",
    "scan_router",
]
