"""Firestore-backed user profile repository (implements IUserRepository)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from app.application.dtos.user import ProfileUpdate, TokenClaims, UserResult
from app.domain.enums import UserRole
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase._rest_client import DESCENDING, FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_USERS
from app.shared.utils.datetime import utc_now

# Suspended users are filtered after the query, so over-fetch a little.
_LEADERBOARD_OVERFETCH = 2


def _role(raw: Any) -> UserRole:
    try:
        return UserRole(raw)
    except ValueError:
        return UserRole.USER


class FirestoreUserRepository:
    """User repository using Firestore; document id is the auth uid."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_USERS)

    def _to_result(self, doc_id: str, data: dict) -> UserResult:
        created_at = data.get("createdAt")
        return UserResult(
            uid=doc_id,
            display_name=data.get("displayName"),
            email=data.get("email"),
            photo_url=data.get("photoURL"),
            points=int(data.get("points") or 0),
            role=_role(data.get("role")),
            is_suspended=bool(data.get("isSuspended", False)),
            social_media_link=data.get("socialMediaLink"),
            created_at=created_at if isinstance(created_at, datetime) else None,
        )

    async def get_by_id(self, uid: str) -> UserResult | None:
        """Return user by uid."""
        doc = await self._coll.document(uid).get()
        if not doc:
            return None
        return self._to_result(doc.id, doc.to_dict())

    async def create(
        self,
        uid: str,
        display_name: str | None,
        email: str | None,
        role: UserRole = UserRole.USER,
        photo_url: str | None = None,
    ) -> UserResult:
        """Write a fresh profile (points 0, not suspended)."""
        data = {
            "displayName": display_name,
            "email": email,
            "photoURL": photo_url,
            "points": 0,
            "role": role.value,
            "isSuspended": False,
            "createdAt": utc_now(),
        }
        await self._coll.document(uid).set(data)
        return self._to_result(uid, data)

    async def get_or_create(self, claims: TokenClaims) -> UserResult:
        """Return the profile, creating it from the verified token claims on first access."""
        existing = await self.get_by_id(claims.uid)
        if existing is not None:
            return existing
        return await self.create(
            claims.uid,
            claims.display_name,
            claims.email,
            photo_url=claims.photo_url,
        )

    async def _update(self, uid: str, fields: dict[str, Any]) -> UserResult:
        ref = self._coll.document(uid)
        if await ref.get() is None:
            raise ResourceNotFoundException("user", uid)
        if fields:
            await ref.update(fields)
        updated = await self.get_by_id(uid)
        if updated is None:
            raise ResourceNotFoundException("user", uid)
        return updated

    async def update_profile(self, uid: str, data: ProfileUpdate) -> UserResult:
        fields: dict[str, Any] = {}
        if data.display_name is not None:
            fields["displayName"] = data.display_name
        if data.photo_url is not None:
            fields["photoURL"] = data.photo_url
        if data.social_media_link is not None:
            fields["socialMediaLink"] = data.social_media_link
        return await self._update(uid, fields)

    async def set_role(self, uid: str, role: UserRole) -> UserResult:
        return await self._update(uid, {"role": role.value})

    async def set_suspended(self, uid: str, suspended: bool) -> UserResult:
        return await self._update(uid, {"isSuspended": suspended})

    async def list_all(self) -> list[UserResult]:
        """Return all users ordered by displayName."""
        return [
            self._to_result(doc.id, doc.to_dict())
            async for doc in self._coll.order_by("displayName").stream()
        ]

    async def top_by_points(self, limit: int) -> list[UserResult]:
        """Return up to limit non-suspended users by points, highest first."""
        query = self._coll.order_by("points", DESCENDING).limit(limit * _LEADERBOARD_OVERFETCH)
        users = [
            self._to_result(doc.id, doc.to_dict()) async for doc in query.stream()
        ]
        return [u for u in users if not u.is_suspended][:limit]

    async def delete(self, uid: str) -> None:
        await self._coll.document(uid).delete()
