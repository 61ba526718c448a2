from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from library_api.domain import BookId


class BookBase(BaseModel):
    title: str
    author: str
    isbn: str
    published_year: int | None = None
    copies_total: int
    copies_available: int


class Book(BookBase):
    id: BookId
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class BookCreate(BaseModel):
    """Create payload. Missing fields decode to zero values and are rejected by the validator."""

    title: str = Field(default="", examples=["The Great Gatsby"])
    author: str = Field(default="", examples=["F. Scott Fitzgerald"])
    isbn: str = Field(default="", examples=["9780743273565"])
    published_year: int | None = Field(default=None, examples=[1925])
    copies_total: int = Field(default=0, examples=[5])
    copies_available: int | None = Field(
        default=None,
        description="Defaults to copies_total when omitted",
        examples=[5],
    )

    model_config = ConfigDict(strict=True)


class BookUpdate(BaseModel):
    """Full-replace payload for an existing book."""

    title: str = Field(default="", examples=["The Great Gatsby"])
    author: str = Field(default="", examples=["F. Scott Fitzgerald"])
    isbn: str = Field(default="", examples=["9780743273565"])
    published_year: int | None = Field(default=None, examples=[1925])
    copies_total: int = Field(default=0, examples=[5])
    copies_available: int = Field(default=0, examples=[3])

    model_config = ConfigDict(strict=True)


class BookListFilter(BaseModel):
    title: str | None = None
    author: str | None = None
    isbn: str | None = None
    limit: int = 0
    offset: int = 0
