"""Security headers middleware.

API responses get a locked-down CSP. The interactive docs pages load
Swagger UI / ReDoc assets from jsDelivr, so they get a CSP that allows
that CDN. Headers a route already set are left alone. Raw ASGI.
"""

from typing import Callable

API_CSP = "default-src 'none'; frame-ancestors 'none'"
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net https://fonts.googleapis.com; "
    "font-src 'self' https://fonts.gstatic.com; "
    "img-src 'self' data: https://fastapi.tiangolo.com https://cdn.redoc.ly; "
    "worker-src 'self' blob:; frame-ancestors 'none'"
)
HTML_PAGE_PATHS = frozenset({"/", "/docs", "/redoc"})

COMMON_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Add security headers (COMMON_HEADERS plus a path-dependent CSP)."""
    common = [(k.lower().encode(), v.encode()) for k, v in (headers or COMMON_HEADERS).items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        csp = DOCS_CSP if scope.get("path") in HTML_PAGE_PATHS else API_CSP
        extra = common + [(b"content-security-policy", csp.encode())]

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                present = {name.lower() for name, _ in headers}
                headers.extend(h for h in extra if h[0] not in present)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
