"""AuthService, UserService and NotificationService with mocked collaborators."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.notification import PushMessage
from app.application.dtos.user import (
    AuthenticatedUser,
    AuthSession,
    ProfileUpdate,
    TokenClaims,
    UserResult,
)
from app.application.use_cases import AuthService, NotificationService, UserService
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthenticationException,
    ReauthenticationRequiredException,
    ServiceNotConfiguredException,
    ValidationException,
)

SESSION = AuthSession(uid="u1", id_token="id", refresh_token="r", expires_in=3600, email="a@example.com")


class TestAuthService:
    async def test_register_creates_profile(self) -> None:
        provider, users = AsyncMock(), AsyncMock()
        provider.sign_up.return_value = SESSION

        session = await AuthService(provider, users).register("a@example.com", "secret1", "Asha")

        assert session is SESSION
        users.create.assert_awaited_once_with("u1", "Asha", "a@example.com", role=UserRole.USER)

    async def test_bootstrap_admin_with_matching_secret(self) -> None:
        provider, users = AsyncMock(), AsyncMock()
        provider.sign_up.return_value = SESSION
        service = AuthService(provider, users, bootstrap_admin_secret="s3cret")

        await service.bootstrap_admin("s3cret", "a@example.com", "secret1")

        assert users.create.await_args.kwargs["role"] == UserRole.ADMIN

    @pytest.mark.parametrize("provided", [None, "", "wrong"])
    async def test_bootstrap_admin_rejects_bad_secret(self, provided) -> None:
        provider = AsyncMock()
        service = AuthService(provider, AsyncMock(), bootstrap_admin_secret="s3cret")
        with pytest.raises(AuthenticationException):
            await service.bootstrap_admin(provided, "a@example.com", "secret1")
        provider.sign_up.assert_not_awaited()

    async def test_bootstrap_admin_disabled_without_secret(self) -> None:
        with pytest.raises(ServiceNotConfiguredException):
            await AuthService(AsyncMock(), AsyncMock()).bootstrap_admin("x", "a@example.com", "secret1")


class TestUserService:
    def _caller(self) -> AuthenticatedUser:
        return AuthenticatedUser(
            claims=TokenClaims(uid="u1"),
            profile=UserResult(uid="u1", display_name="Asha", email=None),
            id_token="id-token",
        )

    async def test_delete_account_removes_auth_then_profile(self) -> None:
        provider, users = AsyncMock(), AsyncMock()

        await UserService(users, provider).delete_account(self._caller())

        provider.delete_account.assert_awaited_once_with("id-token")
        users.delete.assert_awaited_once_with("u1")

    async def test_delete_account_keeps_profile_when_reauth_needed(self) -> None:
        provider, users = AsyncMock(), AsyncMock()
        provider.delete_account.side_effect = ReauthenticationRequiredException()

        with pytest.raises(ReauthenticationRequiredException):
            await UserService(users, provider).delete_account(self._caller())
        users.delete.assert_not_awaited()

    async def test_blank_display_name_rejected(self) -> None:
        with pytest.raises(ValidationException):
            await UserService(AsyncMock()).update_profile("u1", ProfileUpdate(display_name="  "))

    async def test_leaderboard_ranks_from_one(self) -> None:
        users = AsyncMock()
        users.top_by_points.return_value = [
            UserResult(uid="a", display_name="A", email=None, points=30),
            UserResult(uid="b", display_name="B", email=None, points=20),
        ]

        board = await UserService(users).leaderboard(limit=2)

        users.top_by_points.assert_awaited_once_with(2)
        assert [(e.rank, e.uid, e.points) for e in board] == [(1, "a", 30), (2, "b", 20)]


class TestNotificationService:
    async def test_broadcast_removes_unregistered_tokens(self) -> None:
        tokens, sender = AsyncMock(), AsyncMock()
        tokens.list_tokens.return_value = ["t1", "t2", "t3"]
        outcomes = {"t1": "sent", "t2": "unregistered", "t3": "failed"}
        sender.send_many.side_effect = lambda sent_to, message: [outcomes[t] for t in sent_to]

        result = await NotificationService(tokens, sender).broadcast(PushMessage("New", "Models added"))

        assert (result.sent, result.failed, result.removed_tokens) == (1, 2, 1)
        tokens.remove.assert_awaited_once_with("t2")

    async def test_broadcast_requires_sender(self) -> None:
        with pytest.raises(ServiceNotConfiguredException):
            await NotificationService(AsyncMock()).broadcast(PushMessage("t", "b"))

    async def test_blank_token_rejected(self) -> None:
        tokens = AsyncMock()
        with pytest.raises(ValidationException):
            await NotificationService(tokens).register_token("u1", "  ")
        tokens.add.assert_not_awaited()
