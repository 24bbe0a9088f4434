"""Request ID and access log middleware.

Forwards a client X-Request-ID when it is safe to log (short, limited
character set), otherwise generates one. The id is exposed on
request.state.request_id, echoed on the response, and included in one
access log line per request. Raw ASGI so streaming responses pass through.
"""

import logging
import re
import time
import uuid
from typing import Callable

from app.middleware._asgi import get_header

logger = logging.getLogger("app.access")

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def resolve_request_id(raw: str | None) -> str:
    """Client value when safe for logs, else a new hex UUID."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.match(candidate):
        return candidate
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach a request id to scope state and response headers; log each request."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        started = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: dict) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = [h for h in message.get("headers", []) if h[0].lower() != header_bytes]
                headers.append((header_bytes, request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s %s %.1fms request_id=%s",
                scope.get("method"),
                scope.get("path"),
                status_code,
                (time.perf_counter() - started) * 1000,
                request_id,
            )

    return asgi_app
