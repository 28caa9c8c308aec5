"""
common.middleware
~~~~~~~~~~~~~~~~~
Structured JSON request-logging middleware powered by structlog.

Every request gets a ``request_id`` bound into the structlog context, so all
records emitted while serving it (including the bulk reconciliation logs)
can be correlated.
"""
import time
import uuid

import structlog

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"


class StructuredLoggingMiddleware:
    """
    WSGI middleware that emits one structured log record per HTTP request.

    Log record fields:
        event       – "http_request"
        request_id  – value of ``X-Request-ID`` or a fresh uuid4 hex
        method      – HTTP verb (GET, POST, …)
        path        – URL path
        status      – HTTP response status code (int)
        duration_ms – Round-trip duration in milliseconds (float, 2 dp)
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.META.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.monotonic()
        try:
            response = self.get_response(request)
            duration_ms = round((time.monotonic() - start) * 1000, 2)

            logger.info(
                "http_request",
                method=request.method,
                path=request.get_full_path(),
                status=response.status_code,
                duration_ms=duration_ms,
            )
            response["X-Request-ID"] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
