from library_api.schemas.book import Book, BookCreate, BookListFilter, BookUpdate
from library_api.schemas.error import ErrorBody, ErrorResponse

__all__ = [
    "Book",
    "BookCreate",
    "BookUpdate",
    "BookListFilter",
    "ErrorBody",
    "ErrorResponse",
]
