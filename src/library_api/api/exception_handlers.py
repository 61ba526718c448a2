import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from library_api.api.responses import (
    INTERNAL_ERROR_MESSAGE,
    MalformedRequestError,
    error_response,
)
from library_api.errors import BadRequestError, ConflictError, LibraryError, NotFoundError

logger = logging.getLogger(__name__)

_PUBLIC_MESSAGES: dict[type[LibraryError], str] = {
    NotFoundError: "Resource not found",
    ConflictError: "Resource conflict",
}


async def library_error_handler(request: Request, exc: LibraryError) -> JSONResponse:
    if isinstance(exc, BadRequestError):
        return error_response(exc.status_code, exc.code, str(exc), exc.details)

    logger.info("Request rejected code=%s reason=%s", exc.code, exc)
    message = _PUBLIC_MESSAGES.get(type(exc), INTERNAL_ERROR_MESSAGE)
    return error_response(exc.status_code, exc.code, message)


async def malformed_request_handler(
    request: Request, exc: MalformedRequestError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, "bad_request", exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Routes decode their own input; anything FastAPI rejects is still a 400, never a 422.
    return error_response(status.HTTP_400_BAD_REQUEST, "bad_request", "Invalid JSON body")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LibraryError, library_error_handler)
    app.add_exception_handler(MalformedRequestError, malformed_request_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
