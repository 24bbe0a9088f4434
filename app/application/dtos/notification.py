"""DTOs for push notifications."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PushMessage:
    """Notification broadcast to every registered device."""

    title: str
    body: str
    image: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class PushSendResult:
    """Per-broadcast delivery counts."""

    sent: int
    failed: int
    removed_tokens: int = 0
