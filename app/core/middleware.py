"""Shared FastAPI middleware."""

from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response, JSONResponse


class MaxBodySizeMiddleware(BaseHTTPMiddleware):
    """
    Reject requests with bodies larger than the configured limit.

    Estimate requests are a few hundred bytes; anything near the limit is not
    a legitimate client.
    """

    def __init__(self, app, max_body_bytes: int = 16_384):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                if int(content_length) > self.max_body_bytes:
                    return JSONResponse({"detail": "Payload too large."}, status_code=413)
            except ValueError:
                return JSONResponse({"detail": "Invalid Content-Length header."}, status_code=400)

        # Chunked bodies carry no content-length; Starlette caches body() for handlers.
        body = await request.body()
        if body and len(body) > self.max_body_bytes:
            return JSONResponse({"detail": "Payload too large."}, status_code=413)

        return await call_next(request)
