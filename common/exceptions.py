"""
common.exceptions
~~~~~~~~~~~~~~~~~
Centralised DRF exception handler and custom exception classes.
"""
import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base application error.  Subclass to define domain-specific errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_code: str = "error"
    default_detail: str = "An error occurred."

    def __init__(self, detail: str | None = None, code: str | None = None) -> None:
        self.detail = detail or self.default_detail
        self.code = code or self.default_code
        super().__init__(self.detail)

    def __str__(self) -> str:
        return self.detail


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_detail = "The requested resource was not found."


class StorageError(AppError):
    """The resource configuration store failed to load or save a record."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = "storage_error"
    default_detail = "The resource configuration store is unavailable."


class PluginError(AppError):
    """A field enhancer plugin could not be found."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_code = "plugin_error"
    default_detail = "The requested enhancer plugin does not exist."


def custom_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    Global DRF exception handler.
    Converts AppError subclasses to JSON responses and delegates everything
    else to the default DRF handler so standard DRF exceptions still work.
    """
    if isinstance(exc, AppError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "app_error",
            code=exc.code,
            detail=exc.detail,
            status_code=exc.status_code,
        )
        return Response(
            {"code": exc.code, "detail": exc.detail},
            status=exc.status_code,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        logger.warning(
            "drf_error",
            detail=response.data,
            status_code=response.status_code,
        )
    else:
        logger.exception("unhandled_exception", exc_info=exc)

    return response
