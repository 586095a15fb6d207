from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .base import BaseEntityGet, OrderedListQuery
from .categories import CategoryGet
from .companies import CompanyGet

MAX_PRICE = 99999999999999


class ProductCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    category_id: int
    attributes: Dict[str, Any] = Field(default_factory=dict)


class ProductUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category_id: Optional[int] = None
    attributes: Optional[Dict[str, Any]] = None


class ProductGet(BaseEntityGet):
    id: int
    title: str
    description: Optional[str] = None
    price: float
    category_id: int
    company_id: int
    attributes: Dict[str, Any] = Field(default_factory=dict)
    updated_at: Optional[datetime] = None


class ProductDetail(ProductGet):
    company: Optional[CompanyGet] = None


class ProductList(ProductGet):
    category: Optional[CategoryGet] = None


class ProductQuery(OrderedListQuery):
    """
    Product listing parameters.

    `last_categories` holds the categories the caller viewed recently; when no
    explicit sort column is given, products from those categories come first.
    """
    min_price: float = Field(0, ge=0, alias="minPrice")
    max_price: float = Field(MAX_PRICE, ge=0, alias="maxPrice")
    category_id: Optional[int] = Field(None, alias="categoryId")
    last_categories: List[int] = Field(default_factory=list, alias="lastCategories")
