import typing
import uuid
from typing import Annotated

from pydantic import Field

BookId = typing.NewType("BookId", uuid.UUID)

if typing.TYPE_CHECKING:
    BookTitle = typing.NewType("BookTitle", str)
    AuthorName = typing.NewType("AuthorName", str)
    Isbn = typing.NewType("Isbn", str)
    CopyCount = typing.NewType("CopyCount", int)
else:
    _BookTitleStr = Annotated[str, Field(min_length=1)]
    BookTitle = typing.NewType("BookTitle", _BookTitleStr)

    _AuthorNameStr = Annotated[str, Field(min_length=1)]
    AuthorName = typing.NewType("AuthorName", _AuthorNameStr)

    _IsbnStr = Annotated[str, Field(min_length=1)]
    Isbn = typing.NewType("Isbn", _IsbnStr)

    _CopyCountInt = Annotated[int, Field(ge=0)]
    CopyCount = typing.NewType("CopyCount", _CopyCountInt)
