"""Users API: own profile, own contributions, leaderboard, admin user management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    CurrentUser,
    get_contribution_service,
    get_user_service,
)
from app.application.dtos.user import ProfileUpdate
from app.application.use_cases import ContributionService, UserService
from app.core.config import get_settings
from app.core.limiter import limit_writes
from app.schemas.contribution import ContributionResponse
from app.schemas.user import (
    LeaderboardEntryResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    SuspensionUpdateRequest,
    UserResponse,
)

router = APIRouter()
leaderboard_router = APIRouter()
admin_router = APIRouter()

UserSvc = Annotated[UserService, Depends(get_user_service)]


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser, user_svc: UserSvc):
    """Caller's profile, created from the ID token claims on first access."""
    if current_user.profile is not None:
        return UserResponse.model_validate(current_user.profile)
    return UserResponse.model_validate(await user_svc.get_profile(current_user.claims))


@router.patch("/me", response_model=UserResponse)
@limit_writes
async def update_me(
    request: Request, body: ProfileUpdateRequest, current_user: CurrentUser, user_svc: UserSvc
):
    """Update displayName, photoURL and socialMediaLink."""
    result = await user_svc.update_profile(
        current_user.uid,
        ProfileUpdate(
            display_name=body.display_name,
            photo_url=body.photo_url,
            social_media_link=body.social_media_link,
        ),
    )
    return UserResponse.model_validate(result)


@router.delete("/me", status_code=204)
@limit_writes
async def delete_me(request: Request, current_user: CurrentUser, user_svc: UserSvc):
    """Delete the account and profile. A stale sign-in answers 401 REAUTHENTICATION_REQUIRED."""
    await user_svc.delete_account(current_user)


@router.get("/me/contributions", response_model=list[ContributionResponse])
async def my_contributions(
    current_user: CurrentUser,
    contribution_svc: Annotated[ContributionService, Depends(get_contribution_service)],
):
    """Caller's contributions, newest first."""
    items = await contribution_svc.list_for_user(current_user.uid)
    return [ContributionResponse.model_validate(c) for c in items]


@leaderboard_router.get("", response_model=list[LeaderboardEntryResponse])
async def leaderboard(
    user_svc: UserSvc,
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
):
    """Non-suspended users by points, highest first, ranked from 1."""
    entries = await user_svc.leaderboard(limit or get_settings().leaderboard_size)
    return [LeaderboardEntryResponse.model_validate(e) for e in entries]


@admin_router.get("", response_model=list[UserResponse])
async def list_users(user_svc: UserSvc):
    return [UserResponse.model_validate(u) for u in await user_svc.list_users()]


@admin_router.patch("/{uid}/role", response_model=UserResponse)
@limit_writes
async def set_role(request: Request, uid: str, body: RoleUpdateRequest, user_svc: UserSvc):
    return UserResponse.model_validate(await user_svc.set_role(uid, body.role))


@admin_router.patch("/{uid}/suspension", response_model=UserResponse)
@limit_writes
async def set_suspension(
    request: Request, uid: str, body: SuspensionUpdateRequest, user_svc: UserSvc
):
    return UserResponse.model_validate(await user_svc.set_suspended(uid, body.is_suspended))
