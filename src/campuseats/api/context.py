"""Per-request domain context and log context for the HTTP API."""

import time
import uuid

from fastapi import Request

from campuseats.domain import campuseats
from campuseats.utils.logging import add_context, clear_context, get_logger

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


async def request_context_middleware(request: Request, call_next):
    """Run the request inside the campuseats domain context with its id bound into logs.

    The caller's ``X-Request-ID`` is reused when present and echoed back on
    the response.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:16]
    clear_context()
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    started = time.perf_counter()
    try:
        with campuseats.domain_context():
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.debug(
            "request handled",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
    finally:
        clear_context()
