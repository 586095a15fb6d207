from pydantic import BaseModel, Field

from .base import BaseEntityGet


class UserCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=8, max_length=128)


class UserGet(BaseEntityGet):
    id: int
    email: str
