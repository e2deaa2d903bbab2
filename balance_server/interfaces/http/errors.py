"""Exception handlers rendering ``{"error": KIND, "message": ...}`` bodies."""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from balance_server.core.errors import BalanceServerError, ErrorKind, InvariantViolation, StoreError

logger = logging.getLogger(__name__)


async def balance_error_handler(request: Request, exc: BalanceServerError) -> JSONResponse:
    message = exc.message
    if isinstance(exc, (StoreError, InvariantViolation)):
        logger.error("%s on %s %s: %s", exc.kind.value, request.method, request.url.path, exc.message, exc_info=exc)
        message = exc.default_message
    elif exc.status_code >= 500:
        logger.error("%s on %s %s", exc.kind.value, request.method, request.url.path, exc_info=exc)
    else:
        logger.info("%s on %s %s: %s", exc.kind.value, request.method, request.url.path, exc.message)

    return JSONResponse(status_code=exc.status_code, content={"error": exc.kind.value, "message": message})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=422,
        content={
            "error": ErrorKind.VALIDATION_FAILED.value,
            "message": "Validation error",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": ErrorKind.INTERNAL_ERROR.value, "message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BalanceServerError, balance_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)


__all__ = [
    "balance_error_handler",
    "general_exception_handler",
    "register_exception_handlers",
    "validation_exception_handler",
]
