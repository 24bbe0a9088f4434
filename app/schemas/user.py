"""User profile and leaderboard API schemas."""

from datetime import datetime

from pydantic import Field

from app.domain.enums import UserRole
from app.schemas.common import CamelModel


class UserResponse(CamelModel):
    uid: str
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = Field(default=None, alias="photoURL")
    points: int = 0
    role: UserRole = UserRole.USER
    is_suspended: bool = False
    social_media_link: str | None = None
    created_at: datetime | None = None


class ProfileUpdateRequest(CamelModel):
    """Self-service profile fields; omitted fields are left unchanged."""

    display_name: str | None = Field(default=None, max_length=100)
    photo_url: str | None = Field(default=None, alias="photoURL", max_length=2048)
    social_media_link: str | None = Field(default=None, max_length=2048)


class RoleUpdateRequest(CamelModel):
    role: UserRole


class SuspensionUpdateRequest(CamelModel):
    is_suspended: bool


class LeaderboardEntryResponse(CamelModel):
    rank: int
    uid: str
    display_name: str | None = None
    photo_url: str | None = Field(default=None, alias="photoURL")
    points: int
