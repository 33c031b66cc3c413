"""Request correlation: one X-Request-ID per request, on every response."""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

log = structlog.get_logger("wigs.api.request")

REQUEST_ID_HEADER = "X-Request-ID"


def _accepted_id(incoming: str | None) -> str:
    """Reuse a caller-supplied UUID; anything else gets a fresh one."""
    if incoming:
        try:
            return str(uuid.UUID(incoming))
        except ValueError:
            pass
    return str(uuid.uuid4())


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 1)


def request_id_of(request: Request) -> str | None:
    """The id bound by :class:`RequestIDMiddleware`, if it ran for *request*."""
    return getattr(request.state, "request_id", None)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind request_id/method/path into structlog contextvars for the request.

    The id is stored on ``request.state`` as well, so the 500 handler,
    which runs outside this middleware, can still echo it.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _accepted_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        tokens = structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log.exception("http.request_failed", duration_ms=_elapsed_ms(start))
            raise
        else:
            log.info(
                "http.request_done",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(start),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.reset_contextvars(**tokens)
