"""Firestore-backed FCM device token repository (implements IPushTokenRepository)."""

from __future__ import annotations

import hashlib

from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_PUSH_TOKENS
from app.shared.utils.datetime import utc_now


def token_doc_id(token: str) -> str:
    """FCM tokens contain ':' and can be long; key documents by their SHA-256."""
    return hashlib.sha256(token.encode()).hexdigest()


class FirestorePushTokenRepository:
    """Device tokens using Firestore; one document per token."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_PUSH_TOKENS)

    async def add(self, uid: str, token: str) -> None:
        await self._coll.document(token_doc_id(token)).set({
            "token": token,
            "uid": uid,
            "createdAt": utc_now(),
        })

    async def remove(self, token: str) -> None:
        await self._coll.document(token_doc_id(token)).delete()

    async def list_tokens(self) -> list[str]:
        return [
            doc.to_dict()["token"]
            async for doc in self._coll.stream()
            if doc.to_dict().get("token")
        ]
