"""
common.health
~~~~~~~~~~~~~
GET /health/ – lightweight liveness + readiness probe.

Returns:
    200  {"status": "ok", "db": "ok", "cache": "ok"}        – everything healthy
    503  {"status": "degraded", "db": "error: <msg>", ...}  – a backend failed
"""
import structlog
from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = structlog.get_logger(__name__)

_CACHE_CHECK_KEY = "health:check"


def _check_db() -> str:
    try:
        connection.ensure_connection()
    except DatabaseError as exc:
        logger.error("health_check_db_failure", error=str(exc))
        return f"error: {exc}"
    return "ok"


def _check_cache() -> str:
    try:
        cache.set(_CACHE_CHECK_KEY, "ok", timeout=5)
        if cache.get(_CACHE_CHECK_KEY) != "ok":
            return "error: cache did not return the stored value"
    except Exception as exc:  # noqa: BLE001 – any backend failure degrades health
        logger.error("health_check_cache_failure", error=str(exc))
        return f"error: {exc}"
    return "ok"


def health_check(request):
    """Return service health including database and cache status."""
    payload = {"db": _check_db(), "cache": _check_cache()}
    healthy = all(value == "ok" for value in payload.values())
    payload = {"status": "ok" if healthy else "degraded", **payload}
    return JsonResponse(payload, status=200 if healthy else 503)
