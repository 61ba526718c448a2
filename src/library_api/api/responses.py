from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from library_api.schemas.error import ErrorBody, ErrorResponse

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


class MalformedRequestError(Exception):
    """Raised by the HTTP layer when a path parameter or body cannot be decoded."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def error_response(
    status_code: int, code: str, message: str, details: Any | None = None
) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def internal_error_response() -> JSONResponse:
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", INTERNAL_ERROR_MESSAGE
    )
