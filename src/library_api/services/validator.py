from typing import Any

from pydantic import BaseModel, ValidationError

from library_api.domain import AuthorName, BookTitle, CopyCount, Isbn
from library_api.errors import BadRequestError
from library_api.schemas.book import BookCreate, BookUpdate


class _CreateRules(BaseModel):
    title: BookTitle
    author: AuthorName
    isbn: Isbn
    published_year: int | None = None
    copies_total: CopyCount
    copies_available: CopyCount | None = None


class _UpdateRules(BaseModel):
    title: BookTitle
    author: AuthorName
    isbn: Isbn
    published_year: int | None = None
    copies_total: CopyCount
    copies_available: CopyCount


def _describe(exc: ValidationError) -> tuple[str, list[dict[str, Any]]]:
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors(include_url=False)
    ]
    message = "; ".join(f"{item['field']}: {item['message']}" for item in details)
    return message, details


class BookValidator:
    """Field-level and cross-field checks for book payloads. Stateless, safe to share."""

    def validate_create(self, request: BookCreate) -> None:
        self._check(_CreateRules, request.model_dump())

    def validate_update(self, request: BookUpdate) -> None:
        self._check(_UpdateRules, request.model_dump())

    def validate_copies_available(self, copies_available: int, copies_total: int) -> None:
        if copies_available > copies_total:
            raise BadRequestError("copies_available must be <= copies_total")

    @staticmethod
    def _check(rules: type[BaseModel], payload: dict[str, Any]) -> None:
        try:
            rules.model_validate(payload)
        except ValidationError as exc:
            message, details = _describe(exc)
            raise BadRequestError(message, details=details) from exc
