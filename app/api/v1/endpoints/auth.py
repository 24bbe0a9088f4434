"""Auth API: email/password registration, login, token refresh, admin bootstrap.

Tokens are Firebase ID tokens; send them as ``Authorization: Bearer``.
OAuth sign-in happens client-side and only reaches this API as an ID token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request

from app.api.v1.dependencies import get_auth_service
from app.application.use_cases import AuthService
from app.core.limiter import limit_auth, limit_register
from app.schemas.auth import AuthTokenResponse, LoginRequest, RefreshRequest, RegisterRequest

router = APIRouter()


@router.post("/register", response_model=AuthTokenResponse, status_code=201)
@limit_register
async def register(
    request: Request,
    body: RegisterRequest,
    auth_svc: Annotated[AuthService, Depends(get_auth_service)],
):
    """Create an account and its profile (role user, 0 points)."""
    session = await auth_svc.register(body.email, body.password, body.display_name)
    return AuthTokenResponse.model_validate(session)


@router.post("/login", response_model=AuthTokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth_svc: Annotated[AuthService, Depends(get_auth_service)],
):
    session = await auth_svc.login(body.email, body.password)
    return AuthTokenResponse.model_validate(session)


@router.post("/refresh", response_model=AuthTokenResponse)
@limit_auth
async def refresh(
    request: Request,
    body: RefreshRequest,
    auth_svc: Annotated[AuthService, Depends(get_auth_service)],
):
    session = await auth_svc.refresh(body.refresh_token)
    return AuthTokenResponse.model_validate(session)


@router.post("/bootstrap-admin", response_model=AuthTokenResponse, status_code=201)
@limit_register
async def bootstrap_admin(
    request: Request,
    body: RegisterRequest,
    auth_svc: Annotated[AuthService, Depends(get_auth_service)],
    x_bootstrap_admin_secret: Annotated[str | None, Header()] = None,
):
    """Create an admin account. Requires X-Bootstrap-Admin-Secret = BOOTSTRAP_ADMIN_SECRET."""
    session = await auth_svc.bootstrap_admin(
        x_bootstrap_admin_secret, body.email, body.password, body.display_name
    )
    return AuthTokenResponse.model_validate(session)
