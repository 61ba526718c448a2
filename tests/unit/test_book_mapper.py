import uuid
from datetime import UTC, datetime

from library_api.domain import BookId
from library_api.schemas.book import Book, BookCreate, BookUpdate
from library_api.services.book_mapper import apply_update, to_book_for_create


def test_create_mints_distinct_ids():
    request = BookCreate(title="T", author="A", isbn="1", copies_total=1)

    first = to_book_for_create(request)
    second = to_book_for_create(request)

    assert isinstance(first.id, uuid.UUID)
    assert first.id != second.id
    assert first.created_at is None


def test_create_defaults_copies_available_to_total():
    book = to_book_for_create(BookCreate(title="T", author="A", isbn="1", copies_total=7))

    assert book.copies_available == 7


def test_create_keeps_explicit_zero_copies_available():
    book = to_book_for_create(
        BookCreate(title="T", author="A", isbn="1", copies_total=7, copies_available=0)
    )

    assert book.copies_available == 0


def test_apply_update_replaces_mutable_fields_only():
    created_at = datetime(2024, 1, 1, tzinfo=UTC)
    existing = Book(
        id=BookId(uuid.uuid4()),
        title="Old",
        author="Old Author",
        isbn="1",
        published_year=1999,
        copies_total=2,
        copies_available=1,
        created_at=created_at,
        updated_at=created_at,
    )

    updated = apply_update(
        existing,
        BookUpdate(title="New", author="New Author", isbn="2", copies_total=3, copies_available=3),
    )

    assert updated.id == existing.id
    assert updated.created_at == created_at
    assert updated.title == "New"
    assert updated.isbn == "2"
    assert updated.published_year is None
    assert existing.title == "Old"
