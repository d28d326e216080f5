from datetime import datetime

from pydantic import BaseModel


class UserOut(BaseModel):
    id: str
    email: str
    name: str
    favoriteGenres: list[str]
    avatar: str
    joinDate: datetime
