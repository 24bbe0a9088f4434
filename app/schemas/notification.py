"""Push notification API schemas."""

from pydantic import Field

from app.schemas.common import CamelModel


class PushTokenRequest(CamelModel):
    token: str = Field(..., min_length=1, max_length=4096)


class BroadcastRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=2000)
    image: str | None = None
    url: str | None = Field(default=None, description="Opened on click; defaults to /")


class BroadcastResponse(CamelModel):
    sent: int
    failed: int
    removed_tokens: int = 0
