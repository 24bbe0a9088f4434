"""Push notification API: device tokens (users) and broadcast (admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentUser, get_notification_service
from app.application.dtos.notification import PushMessage
from app.application.use_cases import NotificationService
from app.core.limiter import limit_writes
from app.schemas.notification import BroadcastRequest, BroadcastResponse, PushTokenRequest

router = APIRouter()
admin_router = APIRouter()

NotificationSvc = Annotated[NotificationService, Depends(get_notification_service)]


@router.post("/tokens", status_code=204)
@limit_writes
async def register_token(
    request: Request,
    body: PushTokenRequest,
    current_user: CurrentUser,
    notification_svc: NotificationSvc,
):
    """Register this device's FCM token for the caller."""
    await notification_svc.register_token(current_user.uid, body.token)


@router.delete("/tokens/{token}", status_code=204)
@limit_writes
async def remove_token(
    request: Request,
    token: str,
    current_user: CurrentUser,
    notification_svc: NotificationSvc,
):
    await notification_svc.remove_token(token)


@admin_router.post("", response_model=BroadcastResponse)
@limit_writes
async def broadcast(
    request: Request, body: BroadcastRequest, notification_svc: NotificationSvc
):
    """Send to every registered device; tokens FCM reports as unregistered are removed."""
    result = await notification_svc.broadcast(
        PushMessage(title=body.title, body=body.body, image=body.image, url=body.url)
    )
    return BroadcastResponse.model_validate(result)
