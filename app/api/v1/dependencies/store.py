"""Firestore-backed repository dependencies (composition root).

Every data route depends on get_firestore; when the store is not
configured it answers 503 instead of failing deep inside a repository.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.domain.exceptions import StoreNotConfiguredException
from app.infrastructure.firebase import FirestoreRESTClient, get_firestore_client
from app.infrastructure.firebase.repositories import (
    FirestoreAccessoryRepository,
    FirestoreCategoryRepository,
    FirestoreContributionRepository,
    FirestoreMasterModelRepository,
    FirestorePushTokenRepository,
    FirestoreSearchLogRepository,
    FirestoreUserRepository,
)
from app.infrastructure.firebase.services import (
    FirestoreBulkAccessoryWriter,
    FirestoreReconciliationService,
)


def get_firestore() -> FirestoreRESTClient:
    """Return the Firestore client; 503 when credentials are not configured."""
    client = get_firestore_client()
    if client is None:
        raise StoreNotConfiguredException()
    return client


Firestore = Annotated[FirestoreRESTClient, Depends(get_firestore)]


def get_accessory_repo(client: Firestore) -> FirestoreAccessoryRepository:
    return FirestoreAccessoryRepository(client)


def get_contribution_repo(client: Firestore) -> FirestoreContributionRepository:
    return FirestoreContributionRepository(client)


def get_user_repo(client: Firestore) -> FirestoreUserRepository:
    return FirestoreUserRepository(client)


def get_category_repo(client: Firestore) -> FirestoreCategoryRepository:
    return FirestoreCategoryRepository(client)


def get_master_model_repo(client: Firestore) -> FirestoreMasterModelRepository:
    return FirestoreMasterModelRepository(client)


def get_search_log_repo(client: Firestore) -> FirestoreSearchLogRepository:
    return FirestoreSearchLogRepository(client)


def get_push_token_repo(client: Firestore) -> FirestorePushTokenRepository:
    return FirestorePushTokenRepository(client)


def get_reconciliation_service(client: Firestore) -> FirestoreReconciliationService:
    return FirestoreReconciliationService(client)


def get_bulk_accessory_writer(client: Firestore) -> FirestoreBulkAccessoryWriter:
    return FirestoreBulkAccessoryWriter(client)
