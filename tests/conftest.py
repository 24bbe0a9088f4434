"""Pytest configuration and fixtures for fitmyphone.

Env is set before the app is imported so Settings validation passes
without real credentials. HTTP tests build a fresh app per test and point
the Firestore dependency at the in-memory fake from firestore_fake;
Firebase Auth, FCM and the LLM are replaced on app.state.
"""

import json
import os

os.environ.setdefault(
    "FIREBASE_SERVICE_ACCOUNT_KEY",
    json.dumps({"type": "service_account", "project_id": "test-project"}),
)
os.environ.setdefault("FIREBASE_PROJECT_ID", "test-project")
os.environ.setdefault("BOOTSTRAP_ADMIN_SECRET", "test-bootstrap-secret")

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.v1.dependencies import get_firestore  # noqa: E402
from app.application.dtos.notification import PushMessage  # noqa: E402
from app.application.dtos.search import SuggestionResult  # noqa: E402
from app.application.dtos.user import AuthSession, TokenClaims  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.domain.exceptions import AuthenticationException  # noqa: E402
from app.infrastructure.firebase._rest_client import FirestoreRESTClient  # noqa: E402
from app.main import create_app  # noqa: E402
from firestore_fake import FakeFirestore  # noqa: E402

limiter.enabled = False

ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"
SUSPENDED_TOKEN = "suspended-token"


class FakeTokenVerifier:
    """Maps bearer tokens to claims; anything else is rejected like a bad JWT."""

    def __init__(self, tokens: dict[str, TokenClaims]) -> None:
        self.tokens = tokens

    async def verify(self, id_token: str) -> TokenClaims:
        claims = self.tokens.get(id_token)
        if claims is None:
            raise AuthenticationException("Invalid token")
        return claims


class FakeAuthProvider:
    """Identity Toolkit stand-in: accounts in a dict, uid derived from the email."""

    def __init__(self) -> None:
        self.accounts: dict[str, str] = {}
        self.deleted: list[str] = []

    def _session(self, email: str) -> AuthSession:
        uid = "uid-" + email.split("@")[0]
        return AuthSession(
            uid=uid,
            id_token=f"id-{uid}",
            refresh_token=f"refresh-{uid}",
            expires_in=3600,
            email=email,
        )

    async def sign_up(self, email: str, password: str, display_name: str | None) -> AuthSession:
        self.accounts[email] = password
        return self._session(email)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        if self.accounts.get(email) != password:
            raise AuthenticationException("Invalid email or password")
        return self._session(email)

    async def refresh(self, refresh_token: str) -> AuthSession:
        return self._session(refresh_token.removeprefix("refresh-uid-") + "@example.com")

    async def delete_account(self, id_token: str) -> None:
        self.deleted.append(id_token)


class FakePushSender:
    """Records sends; tokens listed in dead answer unregistered."""

    def __init__(self, dead: set[str] | None = None) -> None:
        self.dead = dead or set()
        self.sent: list[tuple[str, PushMessage]] = []

    async def send(self, token: str, message: PushMessage) -> str:
        self.sent.append((token, message))
        return "unregistered" if token in self.dead else "sent"

    async def send_many(self, tokens: list[str], message: PushMessage) -> list[str]:
        return [await self.send(t, message) for t in tokens]


class FakeSuggestionService:
    def __init__(self) -> None:
        self.queries: list[str] = []

    async def suggest(self, query: str) -> SuggestionResult:
        self.queries.append(query)
        return SuggestionResult(
            suggested_matches=["Galaxy S23"],
            alternative_search_terms=["Samsung S23"],
            recommend_follow_up=False,
        )


@pytest.fixture
def fake_store() -> FakeFirestore:
    """Empty in-memory Firestore with the admin, user and suspended profiles seeded."""
    store = FakeFirestore()
    store.put("users/admin-uid", {
        "displayName": "Admin", "email": "admin@example.com", "points": 0,
        "role": "admin", "isSuspended": False,
    })
    store.put("users/user-uid", {
        "displayName": "Asha", "email": "asha@example.com", "points": 5,
        "role": "user", "isSuspended": False,
    })
    store.put("users/suspended-uid", {
        "displayName": "Sam", "email": "sam@example.com", "points": 40,
        "role": "user", "isSuspended": True,
    })
    return store


@pytest.fixture
def firestore_client(fake_store: FakeFirestore) -> FirestoreRESTClient:
    """FirestoreRESTClient whose HTTP traffic is served by fake_store."""
    return fake_store.client()


@pytest.fixture
def app(firestore_client: FirestoreRESTClient) -> FastAPI:
    """Fresh app wired to the fake store and fake Firebase services."""
    get_settings.cache_clear()
    application = create_app()
    application.dependency_overrides[get_firestore] = lambda: firestore_client
    application.state.token_verifier = FakeTokenVerifier({
        ADMIN_TOKEN: TokenClaims(uid="admin-uid", email="admin@example.com"),
        USER_TOKEN: TokenClaims(uid="user-uid", email="asha@example.com"),
        SUSPENDED_TOKEN: TokenClaims(uid="suspended-uid", email="sam@example.com"),
    })
    application.state.auth_provider = FakeAuthProvider()
    application.state.push_sender = FakePushSender()
    application.state.suggestion_service = FakeSuggestionService()
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def suspended_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {SUSPENDED_TOKEN}"}
