"""Request body size limit middleware.

CSV uploads are the only large bodies this API accepts; anything above
max_bytes is answered with 413 before the route runs. Declared
Content-Length is checked up front; bodies without one (chunked) are
counted while buffered and replayed to the app. Raw ASGI.
"""

from typing import Callable

from app.middleware._asgi import get_header, send_json_error

_BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "DELETE"})


async def _too_large(send: Callable, max_bytes: int, size: int) -> None:
    await send_json_error(
        send,
        413,
        "PAYLOAD_TOO_LARGE",
        f"Request body must be at most {max_bytes} bytes",
        {"max_bytes": max_bytes, "received_bytes": size},
    )


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject request bodies larger than max_bytes."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") in _BODYLESS_METHODS:
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None and declared.strip().isdigit():
            if int(declared) > max_bytes:
                await _too_large(send, max_bytes, int(declared))
                return
            await app(scope, receive, send)
            return

        messages: list[dict] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # Client went away; let the app see the disconnect.
                messages.append(message)
                break
            total += len(message.get("body", b""))
            if total > max_bytes:
                await _too_large(send, max_bytes, total)
                return
            messages.append(message)
            if not message.get("more_body", False):
                break

        pending = iter(messages)

        async def replay() -> dict:
            try:
                return next(pending)
            except StopIteration:
                return await receive()

        await app(scope, replay, send)

    return asgi_app
