from sqlalchemy import ColumnElement, Select, and_, select

from library_api.models import Book as BookModel
from library_api.schemas.book import BookListFilter


def build_conditions(book_filter: BookListFilter) -> list[ColumnElement[bool]]:
    """
    Returns the WHERE predicates for a list filter, in title, author, isbn order.

    Each predicate carries its own bound parameter; filter values never reach
    the SQL text. Empty strings are treated like absent filters.
    """
    conditions: list[ColumnElement[bool]] = []

    if book_filter.title:
        conditions.append(BookModel.title.ilike(f"%{book_filter.title}%"))

    if book_filter.author:
        conditions.append(BookModel.author.ilike(f"%{book_filter.author}%"))

    if book_filter.isbn:
        conditions.append(BookModel.isbn == book_filter.isbn)

    return conditions


def build_list_query(book_filter: BookListFilter) -> Select[tuple[BookModel]]:
    stmt = select(BookModel)

    conditions = build_conditions(book_filter)
    if conditions:
        stmt = stmt.where(and_(*conditions))

    stmt = stmt.order_by(BookModel.created_at.desc())

    if book_filter.limit > 0:
        stmt = stmt.limit(book_filter.limit)

    if book_filter.offset > 0:
        stmt = stmt.offset(book_filter.offset)

    return stmt
