from __future__ import annotations

import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger("workoutlog.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and emit one completion line per request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed request_id=%s method=%s path=%s",
                request_id,
                request.method,
                request.url.path,
            )
            response = PlainTextResponse("Internal Server Error", status_code=500)

        response.headers[REQUEST_ID_HEADER] = request_id
        self._log_completion(request, response, request_id, started)
        return response

    @staticmethod
    def _log_completion(request: Request, response: Response, request_id: str, started: float) -> None:
        duration_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "request_complete request_id=%s method=%s path=%s status_code=%s duration_ms=%.2f user_id=%s",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            getattr(request.state, "user_id", None),
        )
