"""Process-wide Firestore client and the service account behind it.

The service account JSON comes from FIREBASE_SERVICE_ACCOUNT_KEY (inline)
or FIREBASE_SERVICE_ACCOUNT_PATH (file). The same account signs Firestore
REST calls and, scoped differently, FCM sends. If it cannot be loaded the API
still starts: data routes answer 503 and /health/ready reports not_ready.
"""

import json
import logging
from pathlib import Path
from typing import Any

from app.core.config import get_settings
from app.infrastructure.firebase._rest_client import FirestoreRESTClient, _get_credentials

logger = logging.getLogger(__name__)

_firestore_client: FirestoreRESTClient | None = None
_service_account: dict[str, Any] | None = None


def load_service_account() -> dict[str, Any] | None:
    """Service account dict from settings, or None when neither source is set.

    Raises:
        ValueError: The inline key is not JSON, or the file is missing.
    """
    settings = get_settings()
    inline = settings.firebase_service_account_key
    if inline is not None and inline.get_secret_value().strip():
        try:
            return json.loads(inline.get_secret_value())
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e

    if not settings.firebase_service_account_path:
        return None
    path = Path(settings.firebase_service_account_path).expanduser().resolve()
    if not path.is_file():
        raise ValueError(f"FIREBASE_SERVICE_ACCOUNT_PATH does not exist: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def init_firebase() -> bool:
    """Build the Firestore client once; False when credentials are absent or unusable."""
    global _firestore_client, _service_account
    if _firestore_client is not None:
        return True
    try:
        account = load_service_account()
    except ValueError as e:
        logger.error("Firebase credentials rejected: %s", e)
        return False
    if not account:
        logger.info("No Firebase service account configured")
        return False

    project_id = get_settings().firebase_project_id or account.get("project_id")
    if not project_id:
        logger.error("Service account has no project_id and FIREBASE_PROJECT_ID is unset")
        return False
    try:
        credentials = _get_credentials(account)
    except (ValueError, KeyError) as e:
        logger.error("Service account could not be loaded: %s", e)
        return False

    _firestore_client = FirestoreRESTClient(project_id, credentials)
    _service_account = account
    logger.info("Firestore ready for project %s", project_id)
    return True


def get_firestore_client() -> FirestoreRESTClient | None:
    return _firestore_client


def get_service_account() -> dict[str, Any] | None:
    """Loaded service account (FCM credentials are built from it)."""
    return _service_account


def get_project_id() -> str | None:
    """Project of the live client, else FIREBASE_PROJECT_ID."""
    if _firestore_client is not None:
        return _firestore_client.project_id
    return get_settings().firebase_project_id


async def close_firebase() -> None:
    """Close the client's connection pool and forget the account."""
    global _firestore_client, _service_account
    if _firestore_client is None:
        return
    await _firestore_client.aclose()
    _firestore_client = None
    _service_account = None
    logger.info("Firestore client closed")
