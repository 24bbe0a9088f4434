"""Service interfaces (ports) for the application layer.

Protocols define contracts for external services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from app.application.dtos.notification import PushMessage
    from app.application.dtos.search import SuggestionResult
    from app.application.dtos.user import AuthSession, TokenClaims

PushOutcome = Literal["sent", "unregistered", "failed"]


class ISuggestionService(Protocol):
    """Protocol for the LLM fuzzy-match suggestion service."""

    async def suggest(self, query: str) -> SuggestionResult:
        """Return suggestions for a query that matched nothing.

        Raises:
            SuggestionServiceException: On transport, status or payload errors.
        """


class IAuthProvider(Protocol):
    """Protocol for the email/password auth provider."""

    async def sign_up(self, email: str, password: str, display_name: str | None) -> AuthSession:
        """Create an account and return its first session."""

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for tokens."""

    async def refresh(self, refresh_token: str) -> AuthSession:
        """Exchange a refresh token for a fresh ID token."""

    async def delete_account(self, id_token: str) -> None:
        """Delete the account the ID token belongs to."""


class ITokenVerifier(Protocol):
    """Protocol for ID token verification."""

    async def verify(self, id_token: str) -> TokenClaims:
        """Return verified claims; AuthenticationException when invalid."""


class IPushSender(Protocol):
    """Protocol for push message delivery to devices."""

    async def send(self, token: str, message: PushMessage) -> PushOutcome:
        """Deliver message; 'unregistered' when the token is no longer valid."""

    async def send_many(self, tokens: list[str], message: PushMessage) -> list[PushOutcome]:
        """Deliver message to each token; outcomes in token order."""
