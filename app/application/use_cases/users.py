"""User profile, leaderboard and admin user management use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.user import LeaderboardEntry, ProfileUpdate, UserResult
from app.domain.enums import UserRole
from app.domain.exceptions import ServiceNotConfiguredException, ValidationException

if TYPE_CHECKING:
    from app.application.dtos.user import AuthenticatedUser, TokenClaims
    from app.application.interfaces.repositories import IUserRepository
    from app.application.interfaces.services import IAuthProvider

logger = logging.getLogger(__name__)


class UserService:
    """Profiles in users/{uid}; account deletion goes through the auth provider."""

    def __init__(
        self,
        user_repo: "IUserRepository",
        auth_provider: "IAuthProvider | None" = None,
    ) -> None:
        self.user_repo = user_repo
        self.auth_provider = auth_provider

    async def get_profile(self, claims: "TokenClaims") -> UserResult:
        """Profile of the caller, created from the token claims on first access."""
        return await self.user_repo.get_or_create(claims)

    async def update_profile(self, uid: str, data: ProfileUpdate) -> UserResult:
        if data.display_name is not None and not data.display_name.strip():
            raise ValidationException("Display name cannot be empty", field="display_name")
        return await self.user_repo.update_profile(uid, data)

    async def delete_account(self, user: "AuthenticatedUser") -> None:
        """Delete the auth account, then the profile document.

        Raises:
            ReauthenticationRequiredException: The sign-in is too old; the
                user must sign out and in again before deleting.
        """
        if self.auth_provider is None:
            raise ServiceNotConfiguredException("firebase_auth")
        await self.auth_provider.delete_account(user.id_token)
        await self.user_repo.delete(user.uid)
        logger.info("Account %s deleted", user.uid)

    async def leaderboard(self, limit: int = 50) -> list[LeaderboardEntry]:
        """Non-suspended users by points, highest first, ranked from 1."""
        users = await self.user_repo.top_by_points(limit)
        return [
            LeaderboardEntry(
                rank=i,
                uid=u.uid,
                display_name=u.display_name,
                photo_url=u.photo_url,
                points=u.points,
            )
            for i, u in enumerate(users, start=1)
        ]

    async def list_users(self) -> list[UserResult]:
        return await self.user_repo.list_all()

    async def set_role(self, uid: str, role: UserRole) -> UserResult:
        result = await self.user_repo.set_role(uid, role)
        logger.info("User %s role set to %s", uid, role.value)
        return result

    async def set_suspended(self, uid: str, suspended: bool) -> UserResult:
        result = await self.user_repo.set_suspended(uid, suspended)
        logger.info("User %s suspended=%s", uid, suspended)
        return result
