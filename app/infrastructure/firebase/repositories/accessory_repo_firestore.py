"""Firestore-backed accessory repository (implements IAccessoryRepository)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from app.application.dtos.accessory import (
    AccessoryCreate,
    AccessoryResult,
    ContributorSummary,
    ModelEntryResult,
)
from app.domain.entities.accessory import AccessoryEntity, clean_model_names, model_name
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.firebase._rest_client import FirestoreRESTClient, Transaction
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP, ArrayUnion
from app.infrastructure.firebase.collections import COLLECTION_ACCESSORIES

DEFAULT_MANUAL_SOURCE = "Manual Entry"
ADMIN_CONTRIBUTOR_NAME = "Admin"


def accessory_from_doc(doc_id: str, data: dict[str, Any]) -> AccessoryResult:
    """Map a stored accessory document to its read-model (both model encodings)."""
    entries: list[ModelEntryResult] = []
    for entry in data.get("models") or []:
        name = model_name(entry)
        if not name:
            continue
        if isinstance(entry, dict):
            entries.append(
                ModelEntryResult(
                    name=name,
                    contributor_uid=entry.get("contributorUid"),
                    contributor_name=entry.get("contributorName"),
                )
            )
        else:
            entries.append(ModelEntryResult(name=name))
    contributor = data.get("contributor")
    summary = None
    if isinstance(contributor, dict):
        summary = ContributorSummary(
            uid=contributor.get("uid"),
            name=contributor.get("name"),
            points=int(contributor.get("points") or 0),
        )
    last_updated = data.get("lastUpdated")
    return AccessoryResult(
        id=doc_id,
        accessory_type=data.get("accessoryType") or "",
        models=entries,
        contributor=summary,
        source=data.get("source"),
        last_updated=last_updated if isinstance(last_updated, datetime) else None,
    )


def accessory_entity(doc_id: str, data: dict[str, Any]) -> AccessoryEntity:
    """Domain entity over the raw stored entries (used by merge and removal)."""
    return AccessoryEntity(
        id=doc_id,
        accessory_type=data.get("accessoryType") or "",
        models=list(data.get("models") or []),
        contributor=data.get("contributor"),
        source=data.get("source"),
    )


class FirestoreAccessoryRepository:
    """Accessory repository using Firestore."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_ACCESSORIES)

    async def get_by_id(self, accessory_id: str) -> AccessoryResult | None:
        """Return group by ID."""
        doc = await self._coll.document(accessory_id).get()
        if not doc:
            return None
        return accessory_from_doc(doc.id, doc.to_dict())

    async def get_raw(self, accessory_id: str) -> dict[str, Any] | None:
        doc = await self._coll.document(accessory_id).get()
        return doc.to_dict() if doc else None

    async def list_by_category(self, category: str | None) -> list[AccessoryResult]:
        """Return groups of a category (all groups when category is None)."""
        if category:
            stream = self._coll.where("accessoryType", "==", category).stream()
        else:
            stream = self._coll.stream()
        return [accessory_from_doc(doc.id, doc.to_dict()) async for doc in stream]

    async def create(self, data: AccessoryCreate) -> AccessoryResult:
        """Create a group with a generated CUID from an admin's manual entry."""
        names = clean_model_names(data.models)
        if not data.accessory_type.strip():
            raise ValidationException("Please select an accessory type.", field="accessory_type")
        if not names:
            raise ValidationException("Please list at least one model.", field="models")
        ref = self._coll.document()
        contributor_name = data.contributor_name or ADMIN_CONTRIBUTOR_NAME
        await ref.set({
            "accessoryType": data.accessory_type.strip(),
            "models": [{"name": n} for n in names],
            "contributor": {"name": contributor_name, "points": 0},
            "lastUpdated": SERVER_TIMESTAMP,
            "source": data.source or DEFAULT_MANUAL_SOURCE,
        })
        return AccessoryResult(
            id=ref.id,
            accessory_type=data.accessory_type.strip(),
            models=[ModelEntryResult(name=n) for n in names],
            contributor=ContributorSummary(uid=None, name=contributor_name, points=0),
            source=data.source or DEFAULT_MANUAL_SOURCE,
        )

    async def add_model(
        self, accessory_id: str, name: str, contributor_name: str | None = None
    ) -> None:
        """Append one {name, contributorName?} entry with an array union."""
        name = name.strip()
        if not name:
            raise ValidationException("Model name is required", field="name")
        entry: dict[str, Any] = {"name": name}
        if contributor_name:
            entry["contributorName"] = contributor_name
        await self._coll.document(accessory_id).update({
            "models": ArrayUnion([entry]),
            "lastUpdated": SERVER_TIMESTAMP,
        })

    async def remove_model(self, accessory_id: str, name: str) -> int:
        """Remove every entry named name, whichever encoding it uses, in one transaction."""
        ref = self._coll.document(accessory_id)

        async def _remove(tx: Transaction) -> int:
            snap = await tx.get(ref)
            if snap is None:
                raise ResourceNotFoundException("accessory", accessory_id)
            entity = accessory_entity(snap.id, snap.to_dict())
            kept = entity.entries_without(name)
            removed = len(entity.models) - len(kept)
            if removed:
                tx.update(ref, {"models": kept, "lastUpdated": SERVER_TIMESTAMP})
            return removed

        return await self._client.run_transaction(_remove)

    async def delete(self, accessory_id: str) -> None:
        ref = self._coll.document(accessory_id)
        if await ref.get() is None:
            raise ResourceNotFoundException("accessory", accessory_id)
        await ref.delete()
