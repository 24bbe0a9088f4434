"""Push notification use cases: device token registration and broadcast."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.notification import PushMessage, PushSendResult
from app.domain.exceptions import ServiceNotConfiguredException, ValidationException

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IPushTokenRepository
    from app.application.interfaces.services import IPushSender

logger = logging.getLogger(__name__)


class NotificationService:
    """Broadcast to every registered device; dead tokens are forgotten."""

    def __init__(
        self,
        push_token_repo: "IPushTokenRepository",
        push_sender: "IPushSender | None" = None,
    ) -> None:
        self.push_token_repo = push_token_repo
        self.push_sender = push_sender

    async def register_token(self, uid: str, token: str) -> None:
        token = token.strip()
        if not token:
            raise ValidationException("Device token is required", field="token")
        await self.push_token_repo.add(uid, token)

    async def remove_token(self, token: str) -> None:
        await self.push_token_repo.remove(token)

    async def broadcast(self, message: PushMessage) -> PushSendResult:
        """Send message to all tokens; unregistered tokens are deleted."""
        if self.push_sender is None:
            raise ServiceNotConfiguredException("firebase_messaging")
        tokens = await self.push_token_repo.list_tokens()
        outcomes = await self.push_sender.send_many(tokens, message)
        dead = [t for t, o in zip(tokens, outcomes) if o == "unregistered"]
        for token in dead:
            await self.push_token_repo.remove(token)
        sent = sum(1 for o in outcomes if o == "sent")
        logger.info(
            "Broadcast %r: sent=%s failed=%s removed=%s",
            message.title,
            sent,
            len(tokens) - sent,
            len(dead),
        )
        return PushSendResult(sent=sent, failed=len(tokens) - sent, removed_tokens=len(dead))
