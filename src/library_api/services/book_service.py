import logging
import time

from library_api.domain import BookId
from library_api.repositories.books_repository import BooksRepository
from library_api.schemas.book import Book, BookCreate, BookListFilter, BookUpdate
from library_api.services.book_mapper import apply_update, to_book_for_create
from library_api.services.validator import BookValidator

logger = logging.getLogger(__name__)

CREATE_TIMEOUT_SECONDS = 5.0
GET_TIMEOUT_SECONDS = 5.0
UPDATE_TIMEOUT_SECONDS = 5.0
DELETE_TIMEOUT_SECONDS = 5.0
LIST_TIMEOUT_SECONDS = 10.0


def effective_timeout(limit: float, deadline: float | None, operation: str) -> float:
    """
    Returns the time budget for one store call.

    ``deadline`` is the caller's absolute ``time.monotonic()`` deadline. Whichever
    of the caller deadline and the operation limit comes first wins. An already
    expired deadline raises TimeoutError before the store is touched.
    """
    if deadline is None:
        return limit
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise TimeoutError(f"deadline exceeded before {operation}")
    return min(limit, remaining)


class BookService:
    def __init__(self, repo: BooksRepository, validator: BookValidator) -> None:
        self.repo = repo
        self.validator = validator

    def create(self, request: BookCreate, deadline: float | None = None) -> Book:
        self.validator.validate_create(request)

        book = to_book_for_create(request)
        self.validator.validate_copies_available(book.copies_available, book.copies_total)

        timeout = effective_timeout(CREATE_TIMEOUT_SECONDS, deadline, "create")
        created = self.repo.create(book, timeout=timeout)
        logger.info("Book created id=%s isbn=%s", created.id, created.isbn)
        return created

    def get(self, book_id: BookId, deadline: float | None = None) -> Book:
        timeout = effective_timeout(GET_TIMEOUT_SECONDS, deadline, "get")
        return self.repo.get(book_id, timeout=timeout)

    def update(self, book_id: BookId, request: BookUpdate, deadline: float | None = None) -> Book:
        self.validator.validate_update(request)
        self.validator.validate_copies_available(request.copies_available, request.copies_total)

        existing = self.get(book_id, deadline=deadline)
        book = apply_update(existing, request)

        timeout = effective_timeout(UPDATE_TIMEOUT_SECONDS, deadline, "update")
        updated = self.repo.update(book, timeout=timeout)
        logger.info("Book updated id=%s", updated.id)
        return updated

    def delete(self, book_id: BookId, deadline: float | None = None) -> None:
        timeout = effective_timeout(DELETE_TIMEOUT_SECONDS, deadline, "delete")
        self.repo.delete(book_id, timeout=timeout)
        logger.info("Book deleted id=%s", book_id)

    def list(self, book_filter: BookListFilter, deadline: float | None = None) -> list[Book]:
        timeout = effective_timeout(LIST_TIMEOUT_SECONDS, deadline, "list")
        return self.repo.list(book_filter, timeout=timeout)
