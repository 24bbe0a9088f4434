"""Contribution API: user submissions and the admin review queue."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import ActiveUser, AdminUser, get_contribution_service
from app.application.dtos.contribution import ContributionEdit, ContributionSubmit
from app.application.use_cases import ContributionService
from app.core.limiter import limit_writes
from app.domain.enums import ContributionStatus
from app.schemas.contribution import (
    ApprovalResponse,
    ApproveRequest,
    ContributionEditRequest,
    ContributionResponse,
    ContributionSubmitRequest,
    RejectRequest,
)

router = APIRouter()
admin_router = APIRouter()

ContributionSvc = Annotated[ContributionService, Depends(get_contribution_service)]


@router.post("", response_model=ContributionResponse, status_code=201)
@limit_writes
async def submit_contribution(
    request: Request,
    body: ContributionSubmitRequest,
    current_user: ActiveUser,
    contribution_svc: ContributionSvc,
):
    """Submit a new chain (accessoryType + 2 or more models) or models for an existing group."""
    result = await contribution_svc.submit(
        current_user,
        ContributionSubmit(
            models=body.models,
            accessory_type=body.accessory_type,
            add_to_accessory_id=body.add_to_accessory_id,
            source=body.source,
        ),
    )
    return ContributionResponse.model_validate(result)


@admin_router.get("", response_model=list[ContributionResponse])
async def list_contributions(
    contribution_svc: ContributionSvc,
    status: Annotated[ContributionStatus, Query()] = ContributionStatus.PENDING,
):
    items = await contribution_svc.list_by_status(status)
    return [ContributionResponse.model_validate(c) for c in items]


@admin_router.get("/{contribution_id}", response_model=ContributionResponse)
async def get_contribution(contribution_id: str, contribution_svc: ContributionSvc):
    return ContributionResponse.model_validate(await contribution_svc.get(contribution_id))


@admin_router.patch("/{contribution_id}", response_model=ContributionResponse)
@limit_writes
async def edit_contribution(
    request: Request,
    contribution_id: str,
    body: ContributionEditRequest,
    contribution_svc: ContributionSvc,
):
    """Edit a pending or rejected contribution; a rejected one goes back to pending."""
    result = await contribution_svc.edit(
        contribution_id,
        ContributionEdit(
            accessory_type=body.accessory_type,
            models=body.models,
            source=body.source,
            add_to_accessory_id=body.add_to_accessory_id,
        ),
    )
    return ContributionResponse.model_validate(result)


@admin_router.post("/{contribution_id}/approve", response_model=ApprovalResponse)
@limit_writes
async def approve_contribution(
    request: Request,
    contribution_id: str,
    admin: AdminUser,
    contribution_svc: ContributionSvc,
    body: ApproveRequest | None = None,
):
    """Merge into the target group, award points and mark approved, atomically."""
    result = await contribution_svc.approve(
        contribution_id, admin.uid, points=body.points if body else None
    )
    return ApprovalResponse.model_validate(result)


@admin_router.post("/{contribution_id}/reject", response_model=ContributionResponse)
@limit_writes
async def reject_contribution(
    request: Request,
    contribution_id: str,
    admin: AdminUser,
    contribution_svc: ContributionSvc,
    body: RejectRequest | None = None,
):
    result = await contribution_svc.reject(
        contribution_id, admin.uid, reason=body.reason if body else None
    )
    return ContributionResponse.model_validate(result)


@admin_router.delete("/{contribution_id}", status_code=204)
@limit_writes
async def delete_contribution(
    request: Request, contribution_id: str, contribution_svc: ContributionSvc
):
    await contribution_svc.delete(contribution_id)
