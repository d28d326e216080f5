from pydantic import BaseModel


class SearchResultOut(BaseModel):
    books: list[dict]
    totalItems: int


class ShelfOut(BaseModel):
    key: str
    name: str
    books: list[dict]
