import logging
from datetime import UTC, datetime

from sqlalchemy import delete, insert, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from library_api.domain import BookId
from library_api.errors import ConflictError, NotFoundError
from library_api.models import Book as BookModel
from library_api.repositories.query_builder import build_list_query
from library_api.schemas.book import Book, BookListFilter

logger = logging.getLogger(__name__)

PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "sqlstate", None) == PG_UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


class BooksRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, book: Book, timeout: float | None = None) -> Book:
        """
        Inserts the full row in one INSERT ... RETURNING.

        Raises ConflictError when the isbn is already taken.
        """
        stmt = (
            insert(BookModel)
            .values(
                id=book.id,
                title=book.title,
                author=book.author,
                isbn=book.isbn,
                published_year=book.published_year,
                copies_total=book.copies_total,
                copies_available=book.copies_available,
            )
            .returning(*BookModel.__table__.c)
        )
        try:
            self._apply_statement_timeout(timeout)
            created = Book.model_validate(self.session.execute(stmt).one())
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if is_unique_violation(exc):
                logger.info("Rejected duplicate isbn=%s on create", book.isbn)
                raise ConflictError("isbn already exists") from exc
            raise
        except SQLAlchemyError:
            self.session.rollback()
            raise

        return created

    def get(self, book_id: BookId, timeout: float | None = None) -> Book:
        try:
            self._apply_statement_timeout(timeout)
            row = self.session.get(BookModel, book_id)
        except SQLAlchemyError:
            self.session.rollback()
            raise

        if row is None:
            raise NotFoundError(f"book {book_id}")
        return Book.model_validate(row)

    def update(self, book: Book, timeout: float | None = None) -> Book:
        """
        Replaces every mutable column and refreshes updated_at in one UPDATE ... RETURNING.

        Raises NotFoundError when no row has the id and ConflictError on a duplicate isbn.
        """
        stmt = (
            update(BookModel)
            .where(BookModel.id == book.id)
            .values(
                title=book.title,
                author=book.author,
                isbn=book.isbn,
                published_year=book.published_year,
                copies_total=book.copies_total,
                copies_available=book.copies_available,
                updated_at=datetime.now(UTC),
            )
            .returning(*BookModel.__table__.c)
            .execution_options(synchronize_session=False)
        )
        try:
            self._apply_statement_timeout(timeout)
            row = self.session.execute(stmt).one_or_none()
            updated = Book.model_validate(row) if row is not None else None
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if is_unique_violation(exc):
                raise ConflictError("isbn already exists") from exc
            raise
        except SQLAlchemyError:
            self.session.rollback()
            raise

        if updated is None:
            raise NotFoundError(f"book {book.id}")
        return updated

    def delete(self, book_id: BookId, timeout: float | None = None) -> None:
        stmt = (
            delete(BookModel)
            .where(BookModel.id == book_id)
            .execution_options(synchronize_session=False)
        )
        try:
            self._apply_statement_timeout(timeout)
            result = self.session.execute(stmt)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        if result.rowcount == 0:
            raise NotFoundError(f"book {book_id}")

    def list(self, book_filter: BookListFilter, timeout: float | None = None) -> list[Book]:
        """
        Returns books matching the filter, newest first. No match is an empty list.
        """
        stmt = build_list_query(book_filter)
        try:
            self._apply_statement_timeout(timeout)
            rows = self.session.scalars(stmt).all()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        return [Book.model_validate(row) for row in rows]

    def _apply_statement_timeout(self, timeout: float | None) -> None:
        # Transaction-local; the store cancels the next statement once it elapses.
        if timeout is None or self.session.get_bind().dialect.name != "postgresql":
            return
        self.session.execute(
            text("SELECT set_config('statement_timeout', :value, true)"),
            {"value": f"{max(int(timeout * 1000), 1)}ms"},
        )
