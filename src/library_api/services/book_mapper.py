import uuid

from library_api.domain import BookId
from library_api.schemas.book import Book, BookCreate, BookUpdate


def to_book_for_create(request: BookCreate) -> Book:
    """Builds a new Book with a fresh id. copies_available falls back to copies_total."""
    copies_available = request.copies_total
    if request.copies_available is not None:
        copies_available = request.copies_available

    return Book(
        id=BookId(uuid.uuid4()),
        title=request.title,
        author=request.author,
        isbn=request.isbn,
        published_year=request.published_year,
        copies_total=request.copies_total,
        copies_available=copies_available,
    )


def apply_update(existing: Book, request: BookUpdate) -> Book:
    return existing.model_copy(
        update={
            "title": request.title,
            "author": request.author,
            "isbn": request.isbn,
            "published_year": request.published_year,
            "copies_total": request.copies_total,
            "copies_available": request.copies_available,
        }
    )
