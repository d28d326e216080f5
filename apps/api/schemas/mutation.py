from typing import Literal

from pydantic import BaseModel


class MutationOut(BaseModel):
    operation: str
    status: Literal["noop", "applied", "persisted", "persist_failed"]
    error: str | None = None
