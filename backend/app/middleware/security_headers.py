"""
News Archive API — Security Headers Middleware
================================================

What:  Adds the conservative default response headers a browser-facing API
       is expected to send (the same set helmet applies for Express apps).
How:   Headers already set by a handler are left untouched.

Documentation pages (``/api-docs``, ``/redoc``) load Swagger UI assets from a
CDN, so they are served without the cross-origin resource policy.
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

DEFAULT_SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}

DOCS_PATHS = frozenset({"/api-docs", "/redoc"})


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        is_docs = request.url.path in DOCS_PATHS
        for name, value in DEFAULT_SECURITY_HEADERS.items():
            if is_docs and name == "Cross-Origin-Resource-Policy":
                continue
            response.headers.setdefault(name, value)
        return response
