"""Firebase ID token verification.

ID tokens are RS256 JWTs signed with keys Google publishes as x509
certificates. Verification checks signature, audience (project id),
issuer, expiry, and a non-empty subject (the uid).
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import Any

import httpx
from jose import JWTError, jwt

from app.application.dtos.user import TokenClaims
from app.domain.exceptions import AuthenticationException

logger = logging.getLogger(__name__)

FIREBASE_CERTS_URL = (
    "https://www.googleapis.com/robot/v1/metadata/x509/"
    "securetoken@system.gserviceaccount.com"
)
_ISSUER_PREFIX = "https://securetoken.google.com/"
_DEFAULT_CERT_TTL = 3600
_MAX_AGE = re.compile(r"max-age=(\d+)")


class FirebaseTokenVerifier:
    """Implements ITokenVerifier; caches Google's signing certificates per Cache-Control."""

    def __init__(
        self,
        project_id: str,
        http_client: httpx.AsyncClient,
        *,
        certs_url: str = FIREBASE_CERTS_URL,
    ) -> None:
        self._project_id = project_id
        self._http = http_client
        self._certs_url = certs_url
        self._certs: dict[str, str] = {}
        self._certs_expire_at = 0.0
        self._lock = asyncio.Lock()

    async def _get_certs(self, force: bool = False) -> dict[str, str]:
        async with self._lock:
            if not force and self._certs and time.monotonic() < self._certs_expire_at:
                return self._certs
            resp = await self._http.get(self._certs_url)
            resp.raise_for_status()
            self._certs = resp.json()
            match = _MAX_AGE.search(resp.headers.get("cache-control", ""))
            ttl = int(match.group(1)) if match else _DEFAULT_CERT_TTL
            self._certs_expire_at = time.monotonic() + ttl
            return self._certs

    async def verify(self, id_token: str) -> TokenClaims:
        """Verify an ID token and return its claims.

        Raises:
            AuthenticationException: If the token is malformed, unsigned by a
                current key, expired, or issued for another project.
        """
        try:
            header = jwt.get_unverified_header(id_token)
        except JWTError as e:
            raise AuthenticationException("Invalid token") from e
        if header.get("alg") != "RS256":
            raise AuthenticationException("Invalid token algorithm")
        kid = header.get("kid")
        try:
            certs = await self._get_certs()
            if kid not in certs:
                certs = await self._get_certs(force=True)
        except httpx.HTTPError as e:
            logger.error("Could not fetch Firebase signing certificates: %s", e)
            raise AuthenticationException("Token verification unavailable") from e
        cert = certs.get(kid or "")
        if cert is None:
            raise AuthenticationException("Invalid token key")
        try:
            payload: dict[str, Any] = jwt.decode(
                id_token,
                cert,
                algorithms=["RS256"],
                audience=self._project_id,
                issuer=f"{_ISSUER_PREFIX}{self._project_id}",
                options={"require_exp": True, "require_sub": True, "verify_at_hash": False},
            )
        except JWTError as e:
            raise AuthenticationException(f"Invalid token: {e!s}") from e
        return claims_from_payload(payload)


def claims_from_payload(payload: dict[str, Any]) -> TokenClaims:
    """Build TokenClaims from a decoded payload; sub must be a non-empty string."""
    uid = payload.get("sub")
    if not isinstance(uid, str) or not uid:
        raise AuthenticationException("Token missing required claim: sub")
    auth_time = payload.get("auth_time")
    return TokenClaims(
        uid=uid,
        email=payload.get("email"),
        display_name=payload.get("name"),
        photo_url=payload.get("picture"),
        auth_time=int(auth_time) if isinstance(auth_time, (int, float)) else None,
    )
