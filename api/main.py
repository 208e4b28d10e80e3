"""FastAPI service backing the Event Contacts screen."""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import get_settings
from api.routers import contacts_router, form_router, scan_router
from event_contacts.contacts import ContactStore
from event_contacts.screen import ContactScreen
from event_contacts.storage import build_storage

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    storage = build_storage(settings)
    store = ContactStore(storage, key=settings.contacts_key)
    screen = ContactScreen(store)
    await screen.start()
    logger.info(
        f"[API] Loaded {len(store)} contact(s) from {storage.name} storage "
        f"(environment={settings.environment})"
    )
    app.state.screen = screen
    try:
        yield
    finally:
        await store.flush()
        app.state.screen = None


app = FastAPI(
    title="Event Contacts API",
    version="0.1.0",
    description="Local REST interface for the networking event contacts screen.",
    lifespan=lifespan,
)

ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:19006",
    os.getenv("EC_ALLOWED_FRONTEND", "").strip(),
]
origins = [origin for origin in ALLOWED_ORIGINS if origin]

if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(contacts_router, prefix="/contacts", tags=["contacts"])
app.include_router(form_router, prefix="/form", tags=["form"])
app.include_router(scan_router, prefix="/scan", tags=["scan"])


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint with storage configuration."""
    settings = get_settings()
    return {
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "storage": settings.storage_backend,
    }
