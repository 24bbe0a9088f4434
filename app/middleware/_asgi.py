"""Small helpers shared by the raw ASGI middleware."""

import json
from typing import Any, Callable


def get_header(scope: dict, name: str) -> str | None:
    """First header value for name (case-insensitive); headers are (bytes, bytes)."""
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("utf-8", errors="replace")
    return None


async def send_json_error(
    send: Callable, status: int, error: str, message: str, details: dict[str, Any]
) -> None:
    """Send a complete JSON error response shaped like FitmyphoneException.to_dict()."""
    body = json.dumps({"error": error, "message": message, "details": details}).encode()
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode()),
        ],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})
