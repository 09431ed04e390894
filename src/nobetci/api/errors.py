"""Translate domain errors into the response envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import PharmacyLookupError, RepositoryError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def lookup_exception_handler(request: Request, exc: PharmacyLookupError) -> JSONResponse:
    if isinstance(exc, RepositoryError):
        logger.error(f"Roster store failure on {request.url.path}: {exc.message}", exc_info=exc.cause)
        return error_response(exc.status_code, exc.public_message)
    if exc.status_code >= 500:
        logger.error(f"Lookup failure on {request.url.path}: {exc.message}")
        return error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)
    logger.info(f"{request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request parameters")


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PharmacyLookupError, lookup_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
