"""HTTP middleware: request size limit, request ID + access log, security headers.

Applied in main app; order matters (last added = outermost).
"""

from app.middleware.request_id import RequestIDMiddleware
from app.middleware.request_size_limit import RequestSizeLimitMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
]
