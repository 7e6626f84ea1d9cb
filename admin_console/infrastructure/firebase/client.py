"""Firestore client construction (REST-based, no firebase-admin).

Built at app startup from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON string)
or FIREBASE_SERVICE_ACCOUNT_PATH (file path). The client is returned to the
caller (the lifespan keeps it on app.state); there is no module-level
singleton.
"""

import json
import logging
from pathlib import Path

import httpx

from admin_console.core.config import Settings
from admin_console.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def build_firestore_client(
    settings: Settings, http_client: httpx.AsyncClient
) -> FirestoreRESTClient | None:
    """Build the Firestore client, or return None when not configured.

    With FIREBASE_PROJECT_ID and a non-default FIRESTORE_BASE_URL (emulator),
    no service account is needed. On malformed credentials, logs the error and
    returns None so the console can start and report the backend as unavailable.
    """
    try:
        key_dict = _load_key_dict(settings)
        if not key_dict:
            if settings.firebase_project_id and "googleapis.com" not in settings.firestore_base_url:
                logger.info("Using Firestore emulator at %s", settings.firestore_base_url)
                return FirestoreRESTClient(
                    settings.firebase_project_id,
                    None,
                    http_client=http_client,
                    base_url=settings.firestore_base_url,
                )
            return None

        project_id = settings.firebase_project_id or key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return None

        cred = _get_credentials(key_dict)
        return FirestoreRESTClient(
            project_id,
            cred,
            http_client=http_client,
            base_url=settings.firestore_base_url,
        )
    except Exception:
        logger.exception("Firebase initialization failed")
        return None
