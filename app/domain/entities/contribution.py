"""Contribution domain entity.

A user-proposed addition to a compatibility group, pending admin review.
"""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import ContributionStatus
from app.domain.exceptions import (
    ContributionAlreadyReviewedException,
    ValidationException,
)


@dataclass
class ContributionEntity:
    """Domain entity for a contribution.

    Encapsulates the review lifecycle: pending -> approved | rejected,
    rejected -> pending on edit. Approved is terminal.
    """

    id: str
    accessory_type: str
    models: list[str]
    submitted_by: str
    status: ContributionStatus = ContributionStatus.PENDING
    source: str | None = None
    add_to_accessory_id: str | None = None
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None
    accessory_id: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate contribution rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Contribution ID is required", field="id")
        if not isinstance(self.models, list):
            raise ValidationException("models must be a list", field="models")

    @property
    def is_pending(self) -> bool:
        return self.status == ContributionStatus.PENDING

    def ensure_pending(self) -> None:
        """Guard for approve/reject.

        Raises:
            ContributionAlreadyReviewedException: If the status is not pending.
        """
        if not self.is_pending:
            raise ContributionAlreadyReviewedException(self.id, self.status.value)

    def ensure_editable(self) -> None:
        """Guard for admin edits; approved contributions are final.

        Raises:
            ContributionAlreadyReviewedException: If the contribution is approved.
        """
        if self.status == ContributionStatus.APPROVED:
            raise ContributionAlreadyReviewedException(self.id, self.status.value)

    def status_after_edit(self) -> ContributionStatus:
        """Editing a rejected contribution sends it back to review."""
        if self.status == ContributionStatus.REJECTED:
            return ContributionStatus.PENDING
        return self.status
