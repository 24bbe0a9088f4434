"""DTOs for contribution submission and review."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import ContributionStatus


@dataclass(frozen=True)
class ContributionResult:
    """Contribution read-model."""

    id: str
    accessory_type: str
    models: list[str]
    submitted_by: str
    status: ContributionStatus
    source: str | None = None
    add_to_accessory_id: str | None = None
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None
    accessory_id: str | None = None


@dataclass(frozen=True)
class ContributionSubmit:
    """User submission: a new chain (category + models) or models for an existing group."""

    models: list[str]
    accessory_type: str | None = None
    add_to_accessory_id: str | None = None
    source: str | None = None


@dataclass(frozen=True)
class ContributionEdit:
    """Admin edit of a contribution; None leaves a field unchanged."""

    accessory_type: str | None = None
    models: list[str] | None = None
    source: str | None = None
    add_to_accessory_id: str | None = None


@dataclass(frozen=True)
class ApprovalResult:
    """Outcome of approving a contribution in one transaction."""

    contribution_id: str
    accessory_id: str
    created_group: bool
    added_models: list[str] = field(default_factory=list)
    points_awarded: int = 0
    master_models_created: list[str] = field(default_factory=list)
