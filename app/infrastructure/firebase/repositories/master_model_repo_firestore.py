"""Firestore-backed master model repository (implements IMasterModelRepository)."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from app.application.dtos.catalog import MasterModelResult
from app.domain.exceptions import (
    MasterModelAlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.exceptions import DocumentExistsError
from app.infrastructure.firebase._rest_client import MAX_BATCH_WRITES, FirestoreRESTClient
from app.infrastructure.firebase.collections import (
    COLLECTION_MASTER_MODELS,
    master_model_doc_id,
)
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class FirestoreMasterModelRepository:
    """Master model list using Firestore; one document per name, keyed by name."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_MASTER_MODELS)

    def _to_result(self, doc_id: str, data: dict) -> MasterModelResult:
        created_at = data.get("createdAt")
        return MasterModelResult(
            id=doc_id,
            name=data.get("name") or doc_id,
            created_at=created_at if isinstance(created_at, datetime) else None,
        )

    async def list_all(self) -> list[MasterModelResult]:
        """Return master models ordered by name."""
        return [
            self._to_result(doc.id, doc.to_dict())
            async for doc in self._coll.order_by("name").stream()
        ]

    async def add(self, name: str) -> MasterModelResult:
        """Add one name; exact duplicates are rejected."""
        name = name.strip()
        if not name:
            raise ValidationException("Model name is required", field="name")
        doc_id = master_model_doc_id(name)
        now = utc_now()
        try:
            await self._coll.create(doc_id, {"name": name, "createdAt": now})
        except DocumentExistsError as e:
            raise MasterModelAlreadyExistsException(name) from e
        return MasterModelResult(id=doc_id, name=name, created_at=now)

    async def add_many(self, names: list[str]) -> int:
        """Add every name not already listed; returns the number added."""
        existing = {m.name for m in await self.list_all()}
        fresh: list[str] = []
        for raw in names:
            name = raw.strip()
            if name and name not in existing:
                existing.add(name)
                fresh.append(name)
        if not fresh:
            return 0
        now = utc_now()
        batches = []
        for start in range(0, len(fresh), MAX_BATCH_WRITES):
            batch = self._client.batch()
            for name in fresh[start : start + MAX_BATCH_WRITES]:
                batch.set(
                    self._coll.document(master_model_doc_id(name)),
                    {"name": name, "createdAt": now},
                )
            batches.append(batch)
        await asyncio.gather(*(b.commit() for b in batches))
        logger.info("Added %s master models in %s batches", len(fresh), len(batches))
        return len(fresh)

    async def delete(self, model_id: str) -> None:
        ref = self._coll.document(model_id)
        if await ref.get() is None:
            raise ResourceNotFoundException("master_model", model_id)
        await ref.delete()
