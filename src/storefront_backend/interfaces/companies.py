from typing import Optional
from pydantic import BaseModel, Field

from .base import BaseEntityGet


class CompanyCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class CompanyUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)


class CompanyGet(BaseEntityGet):
    id: int
    title: str
    user_id: int
