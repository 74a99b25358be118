"""
Firebase initialization and helpers
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
import base64
import os

import firebase_admin
from firebase_admin import credentials, firestore

from oscar_party.core.config import Settings
from oscar_party.services.remote_store import FirestoreRemoteStore

logger = logging.getLogger(__name__)


def load_credentials_info(settings: Settings) -> Optional[dict[str, Any]]:
    """Read service-account info from one of: FIREBASE_CREDENTIALS_JSON,
    FIREBASE_CREDENTIALS_B64, FIREBASE_CREDENTIALS_FILE."""
    if settings.FIREBASE_CREDENTIALS_JSON:
        return json.loads(settings.FIREBASE_CREDENTIALS_JSON)
    if settings.FIREBASE_CREDENTIALS_B64:
        decoded = base64.b64decode(settings.FIREBASE_CREDENTIALS_B64).decode("utf-8")
        return json.loads(decoded)
    if settings.FIREBASE_CREDENTIALS_FILE and os.path.exists(settings.FIREBASE_CREDENTIALS_FILE):
        with open(settings.FIREBASE_CREDENTIALS_FILE, "r", encoding="utf-8") as f:
            return json.load(f)
    return None


def build_remote_store(settings: Settings) -> Optional[FirestoreRemoteStore]:
    """Return a Firestore-backed remote store, or None for local-only mode.

    Missing or unusable credentials are not an error: the app keeps working
    on the local cache alone.
    """
    if not settings.USE_FIREBASE:
        logger.info("Firebase disabled, running on the local cache only")
        return None

    try:
        if not firebase_admin._apps:
            info = load_credentials_info(settings)
            if not info:
                logger.warning("Firebase credentials not provided, running on the local cache only")
                return None
            firebase_admin.initialize_app(credentials.Certificate(info))
        return FirestoreRemoteStore(firestore.client())
    except Exception as e:
        logger.warning(f"Firebase init failed, running on the local cache only: {e}")
        return None
