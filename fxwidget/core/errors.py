from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("fxwidget.errors")


class ConverterError(Exception):
    """Base class for domain errors raised by the conversion core."""

    code = "converter_error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidAmount(ConverterError, ValueError):
    code = "invalid_amount"
    status_code = 422

    def __init__(self, raw, reason: str = "amount must be a positive number"):
        self.raw = raw
        self.reason = reason
        super().__init__(f"{reason}: {raw!r}")


class UnsupportedCurrency(ConverterError, ValueError):
    code = "unsupported_currency"
    status_code = 422

    def __init__(self, currency):
        self.currency = currency
        super().__init__(f"unsupported currency {currency!r}")


class RateNotFound(ConverterError, LookupError):
    """Directed pair missing from the rate table (a configuration gap)."""

    code = "conversion_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, from_code: str, to_code: str):
        self.from_code = from_code
        self.to_code = to_code
        super().__init__(f"no rate for {from_code}-{to_code}")


class RateTableError(ConverterError):
    """Rate table rejected at construction."""

    code = "rate_table_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def http_error_handler(request: Request, exc):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "not_found",
                "detail": f"No route for {request.method} {request.url.path}",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http_error", "detail": exc.detail},
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "detail": exc.errors(),
        },
    )


def converter_error_handler(request: Request, exc: ConverterError):  # type: ignore
    if isinstance(exc, RateNotFound):
        logger.error("rate table gap: %s", exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": str(exc)},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
