"""HTTP middleware: request correlation and timing for the quote API."""
import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("imeda-quotes.middleware")

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Health and metrics polling; timed but not logged
SKIP_LOG_PATHS = {"/health", "/metrics"}


def _request_id(request: Request) -> str:
    # Reuse the caller's id when one is sent
    return request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Stamps each response with a request id and its handling time in ms."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _request_id(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        response: Response = await call_next(request)

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = str(elapsed_ms)

        if request.url.path in SKIP_LOG_PATHS:
            return response

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s -> %d",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "request_id": request_id,
                "duration_ms": elapsed_ms,
                "http_method": request.method,
                "http_path": request.url.path,
                "http_status": response.status_code,
            },
        )
        return response
