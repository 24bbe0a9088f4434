"""Caller identity dependencies: bearer ID token -> verified claims + profile."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.dependencies.services import get_token_verifier
from app.api.v1.dependencies.store import get_user_repo
from app.application.dtos.user import AuthenticatedUser
from app.application.interfaces.repositories import IUserRepository
from app.application.interfaces.services import ITokenVerifier
from app.domain.exceptions import (
    AccountSuspendedException,
    AuthenticationException,
    AuthorizationException,
)

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    verifier: Annotated[ITokenVerifier, Depends(get_token_verifier)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repo)],
) -> AuthenticatedUser | None:
    """Caller from the Firebase ID token if one is sent; else None.

    An invalid token is an error (401), not an anonymous request. The
    profile is created from the claims on first access.
    """
    if not credentials:
        return None
    claims = await verifier.verify(credentials.credentials)
    profile = await user_repo.get_or_create(claims)
    return AuthenticatedUser(claims=claims, profile=profile, id_token=credentials.credentials)


async def get_current_user(
    current_user: Annotated[AuthenticatedUser | None, Depends(get_current_user_optional)],
) -> AuthenticatedUser:
    """Caller from the ID token; 401 when no token is sent."""
    if current_user is None:
        raise AuthenticationException("Not authenticated")
    return current_user


async def get_active_user(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
) -> AuthenticatedUser:
    """Caller that is not suspended (403 otherwise)."""
    if current_user.is_suspended:
        raise AccountSuspendedException(current_user.uid)
    return current_user


async def require_admin(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
) -> AuthenticatedUser:
    """Caller whose stored profile has role admin (403 otherwise)."""
    if not current_user.is_admin:
        raise AuthorizationException(resource="admin", action="access")
    return current_user


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
ActiveUser = Annotated[AuthenticatedUser, Depends(get_active_user)]
AdminUser = Annotated[AuthenticatedUser, Depends(require_admin)]
