"""Firestore-backed category repository (implements ICategoryRepository)."""

from __future__ import annotations

from datetime import datetime

from app.application.dtos.catalog import CategoryResult
from app.domain.exceptions import CategoryAlreadyExistsException, ValidationException
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_CATEGORIES
from app.shared.utils.datetime import utc_now


class FirestoreCategoryRepository:
    """Category repository using Firestore. Categories are referenced by name elsewhere."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_CATEGORIES)

    def _to_result(self, doc_id: str, data: dict) -> CategoryResult:
        created_at = data.get("createdAt")
        return CategoryResult(
            id=doc_id,
            name=data.get("name") or "",
            created_at=created_at if isinstance(created_at, datetime) else None,
        )

    async def list_all(self) -> list[CategoryResult]:
        """Return categories ordered by name."""
        return [
            self._to_result(doc.id, doc.to_dict())
            async for doc in self._coll.order_by("name").stream()
        ]

    async def exists(self, name: str) -> bool:
        async for _ in self._coll.where("name", "==", name).limit(1).stream():
            return True
        return False

    async def add(self, name: str) -> CategoryResult:
        """Add a category unless one with the same name (any case) exists."""
        name = name.strip()
        if not name:
            raise ValidationException("Category name is required", field="name")
        for existing in await self.list_all():
            if existing.name.strip().lower() == name.lower():
                raise CategoryAlreadyExistsException(name)
        ref = self._coll.document()
        now = utc_now()
        await ref.create({"name": name, "createdAt": now})
        return CategoryResult(id=ref.id, name=name, created_at=now)

    async def delete(self, category_id: str) -> None:
        """Delete a category. Accessories keep their accessoryType string."""
        await self._coll.document(category_id).delete()
