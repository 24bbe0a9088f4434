"""Email/password account use cases: register, login, refresh, bootstrap admin."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from app.application.dtos.user import AuthSession
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthenticationException,
    ServiceNotConfiguredException,
)

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IUserRepository
    from app.application.interfaces.services import IAuthProvider

logger = logging.getLogger(__name__)


class AuthService:
    """Accounts live in Firebase Auth; each gets a users/{uid} profile."""

    def __init__(
        self,
        auth_provider: "IAuthProvider",
        user_repo: "IUserRepository",
        bootstrap_admin_secret: str | None = None,
    ) -> None:
        self.auth_provider = auth_provider
        self.user_repo = user_repo
        self.bootstrap_admin_secret = bootstrap_admin_secret

    async def register(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
        role: UserRole = UserRole.USER,
    ) -> AuthSession:
        """Create the auth account and its profile (points 0)."""
        session = await self.auth_provider.sign_up(email, password, display_name)
        await self.user_repo.create(session.uid, display_name, email, role=role)
        logger.info("Registered user %s (role=%s)", session.uid, role.value)
        return session

    async def login(self, email: str, password: str) -> AuthSession:
        return await self.auth_provider.sign_in(email, password)

    async def refresh(self, refresh_token: str) -> AuthSession:
        return await self.auth_provider.refresh(refresh_token)

    async def bootstrap_admin(
        self,
        provided_secret: str | None,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> AuthSession:
        """Create an admin account when the bootstrap secret matches.

        Raises:
            ServiceNotConfiguredException: No bootstrap secret configured.
            AuthenticationException: Secret missing or wrong.
        """
        if not self.bootstrap_admin_secret:
            raise ServiceNotConfiguredException("bootstrap_admin")
        if not provided_secret or not hmac.compare_digest(
            provided_secret.encode(), self.bootstrap_admin_secret.encode()
        ):
            logger.warning("Bootstrap admin attempt with an invalid secret")
            raise AuthenticationException("Invalid bootstrap secret")
        return await self.register(email, password, display_name, role=UserRole.ADMIN)
