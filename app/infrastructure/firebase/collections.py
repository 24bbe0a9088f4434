"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Example:
    from app.infrastructure.firebase.client import get_firestore_client
    from app.infrastructure.firebase.collections import COLLECTION_ACCESSORIES

    db = get_firestore_client()
    if db:
        snap = await db.collection(COLLECTION_ACCESSORIES).document(group_id).get()
"""

# Compatibility groups and the user submissions that feed them
COLLECTION_ACCESSORIES = "accessories"
COLLECTION_CONTRIBUTIONS = "contributions"

# Profiles (doc id = auth uid)
COLLECTION_USERS = "users"

# Reference data maintained by admins
COLLECTION_CATEGORIES = "categories"
COLLECTION_MASTER_MODELS = "master_models"

# Append-only search log and FCM device tokens
COLLECTION_SEARCH_LOGS = "search_logs"
COLLECTION_PUSH_TOKENS = "push_tokens"


def master_model_doc_id(name: str) -> str:
    """Document id for a master model name.

    Firestore ids cannot contain '/', so '%' and '/' are percent-encoded.
    Distinct names always map to distinct ids.
    """
    return name.replace("%", "%25").replace("/", "%2F")
