"""HTTP middleware for request/response logging."""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

SLOW_REQUEST_THRESHOLD_MS = 500
REQUEST_ID_HEADER = "X-Request-ID"

# Streaming endpoints stay open; only their opening is logged
STREAM_PATH_PREFIX = "/subscription/"
# Polled by load balancers; logged at DEBUG so they do not drown real traffic
QUIET_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request under a request id, echoed in `X-Request-ID`.

    A client-supplied `X-Request-ID` is reused so log lines can be matched
    with the caller's. Failures are WARNING (4xx) or ERROR (5xx); slow
    requests are WARNING; subscription streams are logged when they open.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        self._log_response(request_id, request, response.status_code, duration_ms)
        return response

    def _log_response(
        self, request_id: str, request: Request, status: int, duration_ms: float
    ) -> None:
        path = request.url.path
        line = "[%s] %s %s -> %d (%.1fms)"
        args = (request_id, request.method, path, status, duration_ms)

        if status >= 500:
            logger.error(line, *args)
        elif status >= 400:
            logger.warning(line, *args)
        elif path.startswith(STREAM_PATH_PREFIX):
            logger.info("[%s] %s %s -> %d stream opened", *args[:4])
        elif duration_ms > SLOW_REQUEST_THRESHOLD_MS:
            logger.warning(line + " SLOW", *args)
        elif path in QUIET_PATHS:
            logger.debug(line, *args)
        else:
            logger.info(line, *args)
