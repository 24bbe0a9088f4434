"""Firebase Cloud Messaging HTTP v1 client.

Messages carry the web-push presentation the app's service worker uses:
default title, icon and badge, vibration pattern, sticky display and an
"Open App" action that opens data.url (or the site root).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urljoin

import httpx

from app.application.dtos.notification import PushMessage
from app.application.interfaces.services import PushOutcome
from app.infrastructure.firebase._rest_client import _get_access_token

logger = logging.getLogger(__name__)

FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"

DEFAULT_TITLE = "Fitmyphone Update"
ICON_PATH = "/icons/icon-192x192.svg"
VIBRATE_PATTERN = [200, 100, 200]
OPEN_ACTION = {"action": "open", "title": "Open App"}

MAX_CONCURRENT_SENDS = 20

# FCM error statuses meaning the token will never work again.
_UNREGISTERED = frozenset({"UNREGISTERED", "NOT_FOUND"})


def get_messaging_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials scoped for FCM."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[FCM_SCOPE]
    )


def build_message(token: str, message: PushMessage, base_url: str) -> dict[str, Any]:
    """FCM v1 message body for one device."""
    url = message.url or "/"
    notification: dict[str, Any] = {"title": message.title or DEFAULT_TITLE, "body": message.body}
    if message.image:
        notification["image"] = message.image
    webpush_notification: dict[str, Any] = {
        **notification,
        "icon": ICON_PATH,
        "badge": ICON_PATH,
        "vibrate": VIBRATE_PATTERN,
        "requireInteraction": True,
        "actions": [OPEN_ACTION],
        "data": {"url": url},
    }
    return {
        "message": {
            "token": token,
            "notification": notification,
            "data": {"url": url},
            "webpush": {
                "notification": webpush_notification,
                "fcm_options": {"link": urljoin(base_url.rstrip("/") + "/", url.lstrip("/"))},
            },
        }
    }


def _fcm_status(resp: httpx.Response) -> str:
    try:
        error = resp.json().get("error", {})
    except ValueError:
        return ""
    for detail in error.get("details", []) or []:
        code = detail.get("errorCode")
        if code:
            return str(code)
    return str(error.get("status", ""))


class FCMClient:
    """Implements IPushSender with the FCM HTTP v1 API."""

    def __init__(
        self,
        project_id: str,
        credentials,
        http_client: httpx.AsyncClient,
        *,
        base_url: str,
    ) -> None:
        self._url = FCM_SEND_URL.format(project_id=project_id)
        self._credentials = credentials
        self._http = http_client
        self._base_url = base_url

    async def _token(self) -> str:
        return await asyncio.to_thread(_get_access_token, self._credentials)

    async def _post(self, access_token: str, token: str, message: PushMessage) -> PushOutcome:
        try:
            resp = await self._http.post(
                self._url,
                headers={"Authorization": f"Bearer {access_token}"},
                json=build_message(token, message, self._base_url),
            )
        except httpx.HTTPError as e:
            logger.warning("FCM send failed: %s", e)
            return "failed"
        if resp.status_code == 200:
            return "sent"
        status = _fcm_status(resp)
        if resp.status_code == 404 or status in _UNREGISTERED:
            return "unregistered"
        logger.warning("FCM send rejected: status=%s code=%s", resp.status_code, status)
        return "failed"

    async def send(self, token: str, message: PushMessage) -> PushOutcome:
        """Send to one device; never raises for per-device failures."""
        return await self._post(await self._token(), token, message)

    async def send_many(self, tokens: list[str], message: PushMessage) -> list[PushOutcome]:
        """Send to every device, outcomes in token order.

        One access token serves the whole broadcast and at most
        MAX_CONCURRENT_SENDS requests are in flight.
        """
        if not tokens:
            return []
        access_token = await self._token()
        limit = asyncio.Semaphore(MAX_CONCURRENT_SENDS)

        async def _bounded(token: str) -> PushOutcome:
            async with limit:
                return await self._post(access_token, token, message)

        return list(await asyncio.gather(*(_bounded(t) for t in tokens)))
