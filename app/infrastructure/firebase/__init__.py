"""Firebase integration: Firestore (REST), Identity Toolkit auth and FCM."""

from app.infrastructure.firebase._rest_client import (
    ASCENDING,
    DESCENDING,
    MAX_BATCH_WRITES,
    CollectionReference,
    DocumentReference,
    DocumentSnapshot,
    FirestoreRESTClient,
    Query,
    Transaction,
    WriteBatch,
)
from app.infrastructure.firebase._rest_encoding import (
    SERVER_TIMESTAMP,
    ArrayRemove,
    ArrayUnion,
    Increment,
)
from app.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from app.infrastructure.firebase.error_emitter import store_error_emitter

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "MAX_BATCH_WRITES",
    "SERVER_TIMESTAMP",
    "ArrayRemove",
    "ArrayUnion",
    "CollectionReference",
    "DocumentReference",
    "DocumentSnapshot",
    "FirestoreRESTClient",
    "Increment",
    "Query",
    "Transaction",
    "WriteBatch",
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
    "store_error_emitter",
]
