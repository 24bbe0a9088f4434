"""DTOs for user profile, auth and leaderboard use cases."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User profile read-model (users/{uid})."""

    uid: str
    display_name: str | None
    email: str | None
    photo_url: str | None = None
    points: int = 0
    role: UserRole = UserRole.USER
    is_suspended: bool = False
    social_media_link: str | None = None
    created_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class ProfileUpdate:
    """Fields a user may change on their own profile; None leaves a field unchanged."""

    display_name: str | None = None
    photo_url: str | None = None
    social_media_link: str | None = None


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked row of the leaderboard (rank is 1-based)."""

    rank: int
    uid: str
    display_name: str | None
    photo_url: str | None
    points: int


@dataclass(frozen=True)
class TokenClaims:
    """Verified Firebase ID token claims the API relies on."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    auth_time: int | None = None


@dataclass(frozen=True)
class AuthenticatedUser:
    """Caller identity: verified token claims plus the stored profile."""

    claims: TokenClaims
    profile: UserResult | None
    id_token: str = ""

    @property
    def uid(self) -> str:
        return self.claims.uid

    @property
    def is_admin(self) -> bool:
        return self.profile is not None and self.profile.is_admin

    @property
    def is_suspended(self) -> bool:
        return self.profile is not None and self.profile.is_suspended


@dataclass(frozen=True)
class AuthSession:
    """Tokens returned by the auth provider after sign-up, sign-in or refresh."""

    uid: str
    id_token: str
    refresh_token: str
    expires_in: int
    email: str | None = None
