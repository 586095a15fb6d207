from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class OrderedListQuery(BaseModel):
    """
    Pagination and sorting shared by all listings.

    `page` is zero-based; the offset is page * limit. `order_by` and
    `order_by_type` are validated against allow-lists by the listing engine.
    """
    order_by: Optional[str] = Field(None, alias="orderBy")
    order_by_type: Optional[str] = Field(None, alias="orderByType")
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    page: int = Field(0, ge=0)

    model_config = ConfigDict(populate_by_name=True)


class BaseEntityGet(BaseModel):
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = ConfigDict(from_attributes=True)
