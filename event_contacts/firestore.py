"""Cached Firestore client for the firestore storage backend."""
from __future__ import annotations

from typing import Optional

_firestore_client = None


def get_firestore_client(project_id: Optional[str] = None):
    """Return the process-wide Firestore client, creating it on first use.

    Credentials come from the environment (GOOGLE_APPLICATION_CREDENTIALS or
    the runtime's default service account). ``project_id`` only matters for
    the first call, when the default Firebase app is initialized.
    """

    global _firestore_client
    if _firestore_client is not None:
        return _firestore_client

    try:
        import firebase_admin
        from firebase_admin import firestore
    except ModuleNotFoundError as exc:  # pragma: no cover
        raise RuntimeError(
            "firebase-admin is required for Firestore storage. "
            "Install dependencies or set EC_STORAGE_BACKEND=file."
        ) from exc

    if not firebase_admin._apps:
        options = {"projectId": project_id} if project_id else None
        firebase_admin.initialize_app(options=options)
    _firestore_client = firestore.client()
    return _firestore_client


def reset_firestore_client() -> None:
    global _firestore_client
    _firestore_client = None
