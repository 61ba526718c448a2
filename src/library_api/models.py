import uuid
from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class Book(Base):
    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    published_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    copies_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    copies_available: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        CheckConstraint("copies_total >= 0", name="ck_books_copies_total_non_negative"),
        CheckConstraint(
            "copies_available >= 0 AND copies_available <= copies_total",
            name="ck_books_copies_available_range",
        ),
    )
