from typing import Literal

from pydantic import BaseModel


class ActivityItemOut(BaseModel):
    id: str
    type: Literal["review", "completed", "reading"]
    date: str
    timestamp: str
    book: dict
    review: dict | None = None
