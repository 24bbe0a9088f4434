"""Firestore-backed application services (transactional and batched writes)."""

from app.infrastructure.firebase.services.bulk_import_firestore import (
    FirestoreBulkAccessoryWriter,
)
from app.infrastructure.firebase.services.reconciliation_firestore import (
    FirestoreReconciliationService,
)

__all__ = [
    "FirestoreBulkAccessoryWriter",
    "FirestoreReconciliationService",
]
