"""Firestore-backed contribution review (implements IReconciliationService).

Approve, reject and edit each run as one Firestore transaction: all reads
first (contribution, submitter, target group, master models), then the
writes. The status guard sits inside the same transaction, so a second
approval of the same contribution fails instead of awarding points twice,
and concurrent merges into one group are serialized by Firestore (the
loser is retried against the new state).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from app.application.dtos.contribution import (
    ApprovalResult,
    ContributionEdit,
    ContributionResult,
)
from app.domain.entities.accessory import clean_model_names, new_model_names
from app.domain.entities.contribution import ContributionEntity
from app.domain.enums import ContributionStatus, UserRole
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.firebase._rest_client import (
    DocumentReference,
    FirestoreRESTClient,
    Transaction,
)
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP, Increment
from app.infrastructure.firebase.collections import (
    COLLECTION_ACCESSORIES,
    COLLECTION_CONTRIBUTIONS,
    COLLECTION_MASTER_MODELS,
    COLLECTION_USERS,
    master_model_doc_id,
)
from app.infrastructure.firebase.repositories.accessory_repo_firestore import (
    accessory_entity,
)
from app.infrastructure.firebase.repositories.contribution_repo_firestore import (
    contribution_entity,
    contribution_result,
)
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_CONTRIBUTION_SOURCE = "User Contribution"
ANONYMOUS_CONTRIBUTOR = "Anonymous"


class FirestoreReconciliationService:
    """Transactional review workflow over contributions, accessories and users."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._contributions = client.collection(COLLECTION_CONTRIBUTIONS)
        self._accessories = client.collection(COLLECTION_ACCESSORIES)
        self._users = client.collection(COLLECTION_USERS)
        self._master_models = client.collection(COLLECTION_MASTER_MODELS)

    async def _read_contribution(
        self, tx: Transaction, contribution_id: str
    ) -> tuple[DocumentReference, ContributionEntity]:
        ref = self._contributions.document(contribution_id)
        snap = await tx.get(ref)
        if snap is None:
            raise ResourceNotFoundException("contribution", contribution_id)
        return ref, contribution_entity(snap.id, snap.to_dict())

    async def _resolve_group(
        self, tx: Transaction, contribution: ContributionEntity
    ) -> tuple[DocumentReference | None, dict[str, Any] | None]:
        """Target group: addToAccessoryId, else first group of the category, else none."""
        if contribution.add_to_accessory_id:
            ref = self._accessories.document(contribution.add_to_accessory_id)
            snap = await tx.get(ref)
            if snap is None:
                raise ResourceNotFoundException(
                    "accessory", contribution.add_to_accessory_id
                )
            return ref, snap.to_dict()
        if not contribution.accessory_type:
            return None, None
        query = self._accessories.where(
            "accessoryType", "==", contribution.accessory_type
        ).limit(2)
        matches = await tx.query(query)
        if not matches:
            return None, None
        if len(matches) > 1:
            logger.warning(
                "Several groups share category %r; merging into %s",
                contribution.accessory_type,
                matches[0].id,
            )
        return self._accessories.document(matches[0].id), matches[0].to_dict()

    async def approve(
        self, contribution_id: str, reviewer_uid: str, points: int
    ) -> ApprovalResult:
        """Merge a pending contribution into its group and award points atomically.

        Raises:
            ResourceNotFoundException: Contribution or referenced group missing.
            ContributionAlreadyReviewedException: Contribution is not pending.
        """

        async def _approve(tx: Transaction) -> ApprovalResult:
            ref, contribution = await self._read_contribution(tx, contribution_id)
            contribution.ensure_pending()
            names = clean_model_names(contribution.models)
            if not names:
                raise ValidationException("Contribution has no models", field="models")

            user_ref = (
                self._users.document(contribution.submitted_by)
                if contribution.submitted_by
                else None
            )
            user_snap = await tx.get(user_ref) if user_ref is not None else None
            group_ref, group_data = await self._resolve_group(tx, contribution)
            model_ids: dict[str, str] = {}
            for n in names:
                model_ids.setdefault(master_model_doc_id(n), n)
            model_refs = [self._master_models.document(doc_id) for doc_id in model_ids]
            model_snaps = await asyncio.gather(*(tx.get(r) for r in model_refs))

            # Writes start here; no reads past this point.
            user_data = user_snap.to_dict() if user_snap is not None else {}
            is_admin = user_data.get("role") == UserRole.ADMIN.value
            reward = 0 if (user_snap is None or is_admin) else points
            contributor_uid = contribution.submitted_by or None

            created_group = group_ref is None
            if group_ref is None:
                group_ref = self._accessories.document()
                added = names
                tx.set(group_ref, {
                    "accessoryType": contribution.accessory_type,
                    "models": [{"name": n, "contributorUid": contributor_uid} for n in added],
                    "contributor": {
                        "uid": contributor_uid,
                        "name": user_data.get("displayName") or ANONYMOUS_CONTRIBUTOR,
                        "points": reward,
                    },
                    "lastUpdated": SERVER_TIMESTAMP,
                    "source": contribution.source or DEFAULT_CONTRIBUTION_SOURCE,
                })
            else:
                group = accessory_entity(group_ref.id, group_data or {})
                added = new_model_names(group.models, names)
                if added:
                    tx.update(group_ref, {
                        "models": group.models
                        + [{"name": n, "contributorUid": contributor_uid} for n in added],
                        "lastUpdated": SERVER_TIMESTAMP,
                    })

            if user_ref is not None and user_snap is not None and reward:
                tx.update(user_ref, {"points": Increment(reward)})

            created_models: list[str] = []
            for name, model_ref, snap in zip(model_ids.values(), model_refs, model_snaps):
                if snap is None:
                    tx.set(model_ref, {"name": name, "createdAt": SERVER_TIMESTAMP})
                    created_models.append(name)

            tx.update(ref, {
                "status": ContributionStatus.APPROVED.value,
                "reviewedAt": SERVER_TIMESTAMP,
                "reviewedBy": reviewer_uid,
                "accessoryId": group_ref.id,
            })
            return ApprovalResult(
                contribution_id=contribution_id,
                accessory_id=group_ref.id,
                created_group=created_group,
                added_models=list(added),
                points_awarded=reward,
                master_models_created=created_models,
            )

        result = await self._client.run_transaction(_approve)
        logger.info(
            "Contribution %s approved into %s (created=%s, added=%s, points=%s)",
            contribution_id,
            result.accessory_id,
            result.created_group,
            len(result.added_models),
            result.points_awarded,
        )
        return result

    async def reject(
        self, contribution_id: str, reviewer_uid: str, reason: str | None = None
    ) -> ContributionResult:
        """Mark a pending contribution rejected; accessories and users are untouched."""

        async def _reject(tx: Transaction) -> ContributionResult:
            ref, contribution = await self._read_contribution(tx, contribution_id)
            contribution.ensure_pending()
            tx.update(ref, {
                "status": ContributionStatus.REJECTED.value,
                "reviewedAt": SERVER_TIMESTAMP,
                "reviewedBy": reviewer_uid,
                "rejectionReason": reason,
            })
            contribution.status = ContributionStatus.REJECTED
            contribution.reviewed_at = utc_now()
            contribution.reviewed_by = reviewer_uid
            contribution.rejection_reason = reason
            return contribution_result(contribution)

        result = await self._client.run_transaction(_reject)
        logger.info("Contribution %s rejected by %s", contribution_id, reviewer_uid)
        return result

    async def edit(self, contribution_id: str, data: ContributionEdit) -> ContributionResult:
        """Overwrite fields of a pending or rejected contribution (rejected goes back to pending)."""

        async def _edit(tx: Transaction) -> ContributionResult:
            ref, contribution = await self._read_contribution(tx, contribution_id)
            contribution.ensure_editable()
            fields: dict[str, Any] = {}
            if data.accessory_type is not None:
                fields["accessoryType"] = data.accessory_type.strip()
                contribution.accessory_type = fields["accessoryType"]
            if data.models is not None:
                models = clean_model_names(data.models)
                if not models:
                    raise ValidationException("At least one model is required", field="models")
                fields["models"] = models
                contribution.models = models
            if data.source is not None:
                fields["source"] = data.source
                contribution.source = data.source
            if data.add_to_accessory_id is not None:
                fields["addToAccessoryId"] = data.add_to_accessory_id or None
                contribution.add_to_accessory_id = data.add_to_accessory_id or None
            status = contribution.status_after_edit()
            if status != contribution.status:
                fields["status"] = status.value
                fields["rejectionReason"] = None
                contribution.status = status
                contribution.rejection_reason = None
            if fields:
                tx.update(ref, fields)
            return contribution_result(contribution)

        return await self._client.run_transaction(_edit)
