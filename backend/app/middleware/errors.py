"""
News Archive API — Unhandled Error Middleware
===============================================

What:  Turns any exception no handler claimed into a plain-text
       ``500 Something broke!`` response.
How:   Sits innermost in the user middleware chain, so the response still
       passes through the security headers and request ID middleware on its
       way out. Domain errors never reach it: FastAPI's exception handlers
       convert them first.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error("Unexpected error: %s", exc, exc_info=exc)
            return PlainTextResponse("Something broke!", status_code=500)
