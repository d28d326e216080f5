from pydantic import BaseModel

from bookflix.reading import Book, ReadingStatus


class AddToBucketListRequest(BaseModel):
    book: Book
    status: ReadingStatus = ReadingStatus.PLANNED


class UpdateStatusRequest(BaseModel):
    status: ReadingStatus


class BookStatusOut(BaseModel):
    bookId: str
    inBucketList: bool
    status: ReadingStatus | None = None
