"""Firebase Authentication REST client (Identity Toolkit + Secure Token).

Email/password sign-up, sign-in, token refresh and account deletion.
OAuth providers sign in client-side and only ever reach this service
as an ID token.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.dtos.user import AuthSession
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ReauthenticationRequiredException,
    UserAlreadyExistsException,
    ValidationException,
)
from app.infrastructure.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

_INVALID_CREDENTIALS = frozenset(
    {"INVALID_LOGIN_CREDENTIALS", "INVALID_PASSWORD", "EMAIL_NOT_FOUND", "INVALID_EMAIL"}
)
_REAUTH_REQUIRED = frozenset(
    {"CREDENTIAL_TOO_OLD_LOGIN_AGAIN", "TOKEN_EXPIRED", "INVALID_ID_TOKEN", "USER_NOT_FOUND"}
)


def _error_code(resp: httpx.Response) -> str:
    """Identity Toolkit puts the code in error.message, e.g. 'WEAK_PASSWORD : ...'."""
    try:
        message = resp.json().get("error", {}).get("message", "")
    except ValueError:
        return ""
    return str(message).split(" ", 1)[0].strip()


def _raise_for_auth_error(resp: httpx.Response, operation: str) -> None:
    if resp.status_code == 200:
        return
    code = _error_code(resp)
    logger.info("Firebase auth %s failed: status=%s code=%s", operation, resp.status_code, code)
    if code == "EMAIL_EXISTS":
        raise UserAlreadyExistsException()
    if code in _INVALID_CREDENTIALS:
        raise AuthenticationException("Invalid email or password")
    if code == "USER_DISABLED":
        raise AuthorizationException(message="This account has been disabled")
    if code in _REAUTH_REQUIRED:
        raise ReauthenticationRequiredException()
    if code.startswith("WEAK_PASSWORD"):
        raise ValidationException("Password should be at least 6 characters", field="password")
    if code in ("INVALID_REFRESH_TOKEN", "MISSING_REFRESH_TOKEN"):
        raise AuthenticationException("Invalid refresh token")
    raise ExternalServiceError("firebase_auth", code or f"status {resp.status_code}")


class FirebaseAuthClient:
    """Implements IAuthProvider over the Identity Toolkit REST API."""

    def __init__(self, api_key: str, http_client: httpx.AsyncClient) -> None:
        self._api_key = api_key
        self._http = http_client

    async def _post_toolkit(self, method: str, body: dict[str, Any]) -> dict[str, Any]:
        resp = await self._http.post(
            f"{IDENTITY_TOOLKIT_URL}/accounts:{method}",
            params={"key": self._api_key},
            json=body,
        )
        _raise_for_auth_error(resp, method)
        return resp.json()

    @staticmethod
    def _session(data: dict[str, Any]) -> AuthSession:
        return AuthSession(
            uid=data["localId"],
            id_token=data["idToken"],
            refresh_token=data["refreshToken"],
            expires_in=int(data.get("expiresIn") or 3600),
            email=data.get("email"),
        )

    async def sign_up(self, email: str, password: str, display_name: str | None) -> AuthSession:
        """Create an email/password account; sets displayName when given."""
        data = await self._post_toolkit(
            "signUp", {"email": email, "password": password, "returnSecureToken": True}
        )
        session = self._session(data)
        if display_name:
            await self._post_toolkit(
                "update",
                {"idToken": session.id_token, "displayName": display_name, "returnSecureToken": False},
            )
        return session

    async def sign_in(self, email: str, password: str) -> AuthSession:
        data = await self._post_toolkit(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._session(data)

    async def refresh(self, refresh_token: str) -> AuthSession:
        resp = await self._http.post(
            SECURE_TOKEN_URL,
            params={"key": self._api_key},
            data={"grant_type": "refresh_token", "refresh_token": refresh_token},
        )
        _raise_for_auth_error(resp, "refresh")
        data = resp.json()
        return AuthSession(
            uid=data["user_id"],
            id_token=data["id_token"],
            refresh_token=data["refresh_token"],
            expires_in=int(data.get("expires_in") or 3600),
        )

    async def delete_account(self, id_token: str) -> None:
        """Delete the signed-in account; a stale sign-in raises ReauthenticationRequiredException."""
        await self._post_toolkit("delete", {"idToken": id_token})
