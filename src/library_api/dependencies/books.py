from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from library_api.dependencies.database import get_db_session
from library_api.repositories.books_repository import BooksRepository
from library_api.services.book_service import BookService
from library_api.services.validator import BookValidator


def get_books_repository(session: Annotated[Session, Depends(get_db_session)]) -> BooksRepository:
    return BooksRepository(session=session)


def get_book_validator() -> BookValidator:
    return BookValidator()


def get_book_service(
    repo: Annotated[BooksRepository, Depends(get_books_repository)],
    validator: Annotated[BookValidator, Depends(get_book_validator)],
) -> BookService:
    return BookService(repo=repo, validator=validator)
