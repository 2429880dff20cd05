"""Request context middleware."""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .context import REQUEST_ID_HEADER, bind_request, restore

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ``X-Request-ID`` and log one line when it completes.

    A caller-supplied id is reused so the front end can correlate its own logs.
    The access line names the session user when ``require_session`` ran.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(self._header_name) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = bind_request(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers.setdefault(self._header_name, request_id)
            user_id = getattr(request.state, "user_id", None)
            logger.info(
                "%s %s -> %s",
                request.method,
                request.url.path,
                response.status_code,
                extra={
                    "user_id": str(user_id) if user_id is not None else None,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            return response
        finally:
            restore(token)


__all__ = ["RequestContextMiddleware"]
