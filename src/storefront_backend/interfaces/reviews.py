from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .base import BaseEntityGet, OrderedListQuery


class ReviewCreate(BaseModel):
    product_id: int
    rating: int = Field(..., ge=1, le=5)
    text: Optional[str] = Field(None, max_length=5000)


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    text: Optional[str] = Field(None, max_length=5000)


class ReviewGet(BaseEntityGet):
    id: int
    product_id: int
    user_id: int
    rating: int
    text: Optional[str] = None
    updated_at: Optional[datetime] = None


class ReviewQuery(OrderedListQuery):
    """Review listing parameters; `order_by` names a column of the reviewed product."""
    product_id: int = Field(..., alias="productId")
