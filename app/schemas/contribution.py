"""Contribution API schemas."""

from datetime import datetime

from pydantic import Field

from app.domain.enums import ContributionStatus
from app.schemas.common import CamelModel


class ContributionSubmitRequest(CamelModel):
    """New chain (accessoryType + at least 2 models) or models for addToAccessoryId."""

    models: list[str] = Field(..., min_length=1, max_length=200)
    accessory_type: str | None = None
    add_to_accessory_id: str | None = None
    source: str | None = None


class ContributionEditRequest(CamelModel):
    """Admin edit; omitted fields are left unchanged."""

    accessory_type: str | None = None
    models: list[str] | None = None
    source: str | None = None
    add_to_accessory_id: str | None = None


class ApproveRequest(CamelModel):
    points: int | None = Field(default=None, ge=0, description="Defaults to the configured reward")


class RejectRequest(CamelModel):
    reason: str | None = Field(default=None, max_length=500)


class ContributionResponse(CamelModel):
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


class ApprovalResponse(CamelModel):
    contribution_id: str
    accessory_id: str
    created_group: bool
    added_models: list[str]
    points_awarded: int
    master_models_created: list[str]
