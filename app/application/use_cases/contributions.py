"""Contribution use cases: submit, review (approve/reject/edit), delete, list."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.dtos.contribution import (
    ApprovalResult,
    ContributionEdit,
    ContributionResult,
    ContributionSubmit,
)
from app.domain.entities.accessory import clean_model_names, new_model_names
from app.domain.enums import ContributionStatus
from app.domain.exceptions import (
    AccountSuspendedException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.dtos.user import AuthenticatedUser
    from app.application.interfaces.repositories import (
        IAccessoryRepository,
        ICategoryRepository,
        IContributionRepository,
        IReconciliationService,
    )

logger = get_logger(__name__)

NEW_CHAIN_SOURCE = "User Chain Creation"
ADD_TO_GROUP_SOURCE = "User Contribution"
MIN_NEW_CHAIN_MODELS = 2


class ContributionService:
    """Submission and review of user contributions.

    Review operations delegate to IReconciliationService, which applies
    each of them atomically in the store.
    """

    def __init__(
        self,
        contribution_repo: "IContributionRepository",
        accessory_repo: "IAccessoryRepository",
        category_repo: "ICategoryRepository",
        reconciliation: "IReconciliationService",
        reward_points: int = 10,
    ) -> None:
        self.contribution_repo = contribution_repo
        self.accessory_repo = accessory_repo
        self.category_repo = category_repo
        self.reconciliation = reconciliation
        self.reward_points = reward_points

    @traced("contributions.submit")
    async def submit(
        self, user: "AuthenticatedUser", data: ContributionSubmit
    ) -> ContributionResult:
        """Create a pending contribution for the caller.

        New chain: category must exist and at least two distinct models are
        required. Add to existing group: the group must exist, its category
        is used, and at least one model not already listed is required.

        Raises:
            AccountSuspendedException: Caller is suspended.
            ResourceNotFoundException: Target group does not exist.
            ValidationException: Category or model rules are not met.
        """
        if user.is_suspended:
            raise AccountSuspendedException(user.uid)
        names = clean_model_names(data.models)

        if data.add_to_accessory_id:
            group = await self.accessory_repo.get_by_id(data.add_to_accessory_id)
            if group is None:
                raise ResourceNotFoundException("accessory", data.add_to_accessory_id)
            names = new_model_names(group.model_names, names)
            if not names:
                raise ValidationException(
                    "Add at least one model that is not already listed", field="models"
                )
            result = await self.contribution_repo.create(
                submitted_by=user.uid,
                accessory_type=group.accessory_type,
                models=names,
                source=data.source or ADD_TO_GROUP_SOURCE,
                add_to_accessory_id=group.id,
            )
        else:
            category = (data.accessory_type or "").strip()
            if not category:
                raise ValidationException("Accessory type is required", field="accessory_type")
            if not await self.category_repo.exists(category):
                raise ValidationException(
                    f"Unknown accessory type: {category}", field="accessory_type"
                )
            if len(names) < MIN_NEW_CHAIN_MODELS:
                raise ValidationException(
                    "A compatibility chain needs at least 2 different models",
                    field="models",
                )
            result = await self.contribution_repo.create(
                submitted_by=user.uid,
                accessory_type=category,
                models=names,
                source=data.source or NEW_CHAIN_SOURCE,
            )
        logger.info(
            "Contribution %s submitted by %s (%s models)", result.id, user.uid, len(names)
        )
        return result

    @traced("contributions.approve")
    async def approve(
        self, contribution_id: str, reviewer_uid: str, points: int | None = None
    ) -> ApprovalResult:
        """Approve with the default reward unless the reviewer overrides it."""
        reward = self.reward_points if points is None else points
        if reward < 0:
            raise ValidationException("Points cannot be negative", field="points")
        return await self.reconciliation.approve(contribution_id, reviewer_uid, reward)

    @traced("contributions.reject")
    async def reject(
        self, contribution_id: str, reviewer_uid: str, reason: str | None = None
    ) -> ContributionResult:
        reason = (reason or "").strip() or None
        return await self.reconciliation.reject(contribution_id, reviewer_uid, reason)

    async def edit(self, contribution_id: str, data: ContributionEdit) -> ContributionResult:
        return await self.reconciliation.edit(contribution_id, data)

    async def delete(self, contribution_id: str) -> None:
        await self.contribution_repo.delete(contribution_id)
        logger.info("Contribution %s deleted", contribution_id)

    async def get(self, contribution_id: str) -> ContributionResult:
        result = await self.contribution_repo.get_by_id(contribution_id)
        if result is None:
            raise ResourceNotFoundException("contribution", contribution_id)
        return result

    async def list_by_status(self, status: ContributionStatus) -> list[ContributionResult]:
        return await self.contribution_repo.list_by_status(status)

    async def list_for_user(self, uid: str) -> list[ContributionResult]:
        return await self.contribution_repo.list_for_user(uid)
