import uuid
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.models import Book


class DataFactory:
    def __init__(self, session: Session):
        self.session = session
        self._clock = datetime(2024, 1, 1, tzinfo=UTC)

    def create_book(
        self, isbn: str, title: str = "Test Book", author: str = "Test Author", **kwargs
    ) -> Book:
        # Strictly increasing creation times keep ordering assertions deterministic.
        self._clock += timedelta(minutes=1)
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("copies_total", 3)
        kwargs.setdefault("copies_available", kwargs["copies_total"])
        kwargs.setdefault("created_at", self._clock)
        kwargs.setdefault("updated_at", self._clock)
        b = Book(title=title, author=author, isbn=isbn, **kwargs)
        self.session.add(b)
        return b

    def get_books(self) -> list[Book]:
        return list(self.session.execute(select(Book)).scalars().all())

    def commit(self):
        self.session.commit()


@pytest.fixture
def test_data(db_session: Session) -> DataFactory:
    return DataFactory(db_session)


@pytest.fixture
def sample_books(test_data: DataFactory) -> list[Book]:
    books = [
        test_data.create_book(
            isbn="9780743273565",
            title="The Great Gatsby",
            author="F. Scott Fitzgerald",
            published_year=1925,
            copies_total=4,
            copies_available=2,
        ),
        test_data.create_book(
            isbn="9780441172719",
            title="Dune",
            author="Frank Herbert",
            published_year=1965,
        ),
        test_data.create_book(
            isbn="9780553293357",
            title="Foundation",
            author="Isaac Asimov",
        ),
    ]
    test_data.commit()
    return books
