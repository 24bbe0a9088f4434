"""Firestore-backed contribution repository (implements IContributionRepository)."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from app.application.dtos.contribution import ContributionResult
from app.domain.entities.contribution import ContributionEntity
from app.domain.enums import ContributionStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_CONTRIBUTIONS
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=UTC)


def _status(doc_id: str, raw: Any) -> ContributionStatus:
    """Stored status; anything outside the enum marks a corrupt record."""
    try:
        return ContributionStatus(raw)
    except ValueError:
        raise ValidationException(
            f"Contribution {doc_id} has unknown status {raw!r}", field="status"
        ) from None


def _ts(raw: Any) -> datetime | None:
    return raw if isinstance(raw, datetime) else None


def contribution_entity(doc_id: str, data: dict[str, Any]) -> ContributionEntity:
    """Map a stored contribution document to the domain entity."""
    return ContributionEntity(
        id=doc_id,
        accessory_type=data.get("accessoryType") or "",
        models=[m for m in (data.get("models") or []) if isinstance(m, str)],
        submitted_by=data.get("submittedBy") or "",
        status=_status(doc_id, data.get("status")),
        source=data.get("source"),
        add_to_accessory_id=data.get("addToAccessoryId") or None,
        submitted_at=_ts(data.get("submittedAt")),
        reviewed_at=_ts(data.get("reviewedAt")),
        reviewed_by=data.get("reviewedBy"),
        rejection_reason=data.get("rejectionReason"),
        accessory_id=data.get("accessoryId"),
    )


def contribution_result(entity: ContributionEntity) -> ContributionResult:
    return ContributionResult(
        id=entity.id,
        accessory_type=entity.accessory_type,
        models=list(entity.models),
        submitted_by=entity.submitted_by,
        status=entity.status,
        source=entity.source,
        add_to_accessory_id=entity.add_to_accessory_id,
        submitted_at=entity.submitted_at,
        reviewed_at=entity.reviewed_at,
        reviewed_by=entity.reviewed_by,
        rejection_reason=entity.rejection_reason,
        accessory_id=entity.accessory_id,
    )


def _newest_first(items: list[ContributionResult]) -> list[ContributionResult]:
    return sorted(items, key=lambda c: c.submitted_at or _EPOCH, reverse=True)


class FirestoreContributionRepository:
    """Contribution repository using Firestore.

    Lists filter on one field and sort in memory so no composite index
    is needed.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_CONTRIBUTIONS)

    async def get_by_id(self, contribution_id: str) -> ContributionResult | None:
        doc = await self._coll.document(contribution_id).get()
        if not doc:
            return None
        return contribution_result(contribution_entity(doc.id, doc.to_dict()))

    async def create(
        self,
        submitted_by: str,
        accessory_type: str,
        models: list[str],
        source: str,
        add_to_accessory_id: str | None = None,
    ) -> ContributionResult:
        """Create a pending contribution with a generated CUID."""
        now = utc_now()
        data: dict[str, Any] = {
            "accessoryType": accessory_type,
            "models": list(models),
            "submittedBy": submitted_by,
            "submittedAt": now,
            "status": ContributionStatus.PENDING.value,
            "source": source,
        }
        if add_to_accessory_id:
            data["addToAccessoryId"] = add_to_accessory_id
        ref = self._coll.document()
        await ref.create(data)
        return ContributionResult(
            id=ref.id,
            accessory_type=accessory_type,
            models=list(models),
            submitted_by=submitted_by,
            status=ContributionStatus.PENDING,
            source=source,
            add_to_accessory_id=add_to_accessory_id,
            submitted_at=now,
        )

    async def _list_where(self, field: str, value: str) -> list[ContributionResult]:
        items: list[ContributionResult] = []
        async for doc in self._coll.where(field, "==", value).stream():
            try:
                items.append(contribution_result(contribution_entity(doc.id, doc.to_dict())))
            except ValidationException as e:
                logger.warning("Skipping contribution %s: %s", doc.id, e.message)
        return _newest_first(items)

    async def list_by_status(self, status: ContributionStatus) -> list[ContributionResult]:
        return await self._list_where("status", status.value)

    async def list_for_user(self, uid: str) -> list[ContributionResult]:
        return await self._list_where("submittedBy", uid)

    async def delete(self, contribution_id: str) -> None:
        ref = self._coll.document(contribution_id)
        if await ref.get() is None:
            raise ResourceNotFoundException("contribution", contribution_id)
        await ref.delete()
