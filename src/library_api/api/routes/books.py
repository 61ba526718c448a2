import re
import uuid
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel, ValidationError

from library_api.api.responses import MalformedRequestError
from library_api.dependencies.books import get_book_service
from library_api.domain import BookId
from library_api.schemas.book import Book, BookCreate, BookListFilter, BookUpdate
from library_api.schemas.error import ErrorResponse
from library_api.services.book_service import BookService

router = APIRouter(prefix="/v1/books", tags=["books"])

BodyT = TypeVar("BodyT", bound=BaseModel)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    404: {"model": ErrorResponse, "description": "Book not found"},
    409: {"model": ErrorResponse, "description": "Duplicate isbn"},
}


def parse_book_id(book_id: str) -> BookId:
    try:
        return BookId(uuid.UUID(book_id))
    except ValueError as exc:
        raise MalformedRequestError("Invalid book ID") from exc


def json_body(model: type[BodyT]) -> Callable[[Request], Awaitable[BodyT]]:
    """
    Builds a dependency that decodes the raw request body into ``model``.

    The body is parsed as JSON whatever the Content-Type header says. Undecodable
    JSON and values of the wrong JSON type raise MalformedRequestError.
    """

    async def decode(request: Request) -> BodyT:
        try:
            return model.model_validate_json(await request.body())
        except ValidationError as exc:
            raise MalformedRequestError("Invalid JSON body") from exc

    return decode


def _request_body_doc(model: type[BaseModel]) -> dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


def _parse_int(raw: str | None) -> int:
    if raw is None or not _INT_PATTERN.fullmatch(raw):
        return 0
    try:
        value = int(raw)
    except ValueError:
        # Digit strings past the interpreter's conversion limit.
        return INT64_MIN if raw.startswith("-") else INT64_MAX
    # Out-of-range values saturate at the 64-bit bounds the store accepts.
    return max(INT64_MIN, min(value, INT64_MAX))


def list_filter_params(
    title: str | None = Query(None, description="Case-insensitive substring of the title"),
    author: str | None = Query(None, description="Case-insensitive substring of the author"),
    isbn: str | None = Query(None, description="Exact isbn"),
    limit: str | None = Query(None, description="Max number of books; 0 or invalid = no limit"),
    offset: str | None = Query(None, description="Books to skip; 0 or invalid = none"),
) -> BookListFilter:
    return BookListFilter(
        title=title or None,
        author=author or None,
        isbn=isbn or None,
        limit=_parse_int(limit),
        offset=_parse_int(offset),
    )


@router.get("", response_model=list[Book], response_model_exclude_none=True)
def list_books(
    svc: Annotated[BookService, Depends(get_book_service)],
    book_filter: Annotated[BookListFilter, Depends(list_filter_params)],
) -> list[Book]:
    """List books, newest first, optionally filtered by title, author or isbn."""
    return svc.list(book_filter)


@router.post(
    "",
    response_model=Book,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={400: _ERROR_RESPONSES[400], 409: _ERROR_RESPONSES[409]},
    openapi_extra=_request_body_doc(BookCreate),
)
def create_book(
    payload: Annotated[BookCreate, Depends(json_body(BookCreate))],
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Book:
    """Add a book to the catalog. copies_available defaults to copies_total."""
    return svc.create(payload)


@router.get(
    "/{book_id}",
    response_model=Book,
    response_model_exclude_none=True,
    responses={400: _ERROR_RESPONSES[400], 404: _ERROR_RESPONSES[404]},
)
def get_book(
    book_id: Annotated[BookId, Depends(parse_book_id)],
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Book:
    return svc.get(book_id)


@router.put(
    "/{book_id}",
    response_model=Book,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    openapi_extra=_request_body_doc(BookUpdate),
)
def update_book(
    book_id: Annotated[BookId, Depends(parse_book_id)],
    payload: Annotated[BookUpdate, Depends(json_body(BookUpdate))],
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Book:
    """Replace every mutable field of a book."""
    return svc.update(book_id, payload)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: _ERROR_RESPONSES[400], 404: _ERROR_RESPONSES[404]},
)
def delete_book(
    book_id: Annotated[BookId, Depends(parse_book_id)],
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Response:
    svc.delete(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
