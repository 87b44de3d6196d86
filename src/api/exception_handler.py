import logging
import traceback

from django.conf import settings
from ninja_extra import NinjaExtraAPI
from ninja.errors import ValidationError as NinjaValidationError

from src.api.envelopes import envelope_payload
from src.core.exceptions import APIError

logger = logging.getLogger(__name__)


def attach_exception_handlers(api: NinjaExtraAPI) -> None:
    def _envelope(request, *, message: str, status: int, code: str, data=None, errors=None, extra=None,):
        return api.create_response(
            request,
            envelope_payload(
                request,
                message=message,
                status=status,
                code=code,
                data=data,
                errors=errors,
                extra=extra,
            ),
            status=status,
        )

    @api.exception_handler(APIError)
    def on_api_error(request, exc: APIError):
        return _envelope(request, **exc.envelope_fields())

    @api.exception_handler(NinjaValidationError)
    def on_ninja_validation_error(request, exc: NinjaValidationError):
        return _envelope(
            request,
            message="Validation error",
            status=422,
            code="VALIDATION_ERROR",
            errors=exc.errors,
        )

    @api.exception_handler(Exception)
    def on_unexpected_error(request, exc: Exception):
        logger.exception("api.unexpected_error path=%s", getattr(request, "path", ""))
        err = None
        extra = {}
        if settings.DEBUG:
            err = str(exc)
            extra["trace"] = traceback.format_exc(limit=20)
        return _envelope(
            request,
            message="Unexpected error",
            status=500,
            code="INTERNAL_ERROR",
            errors=err,
            extra=extra if settings.DEBUG else None,
        )
