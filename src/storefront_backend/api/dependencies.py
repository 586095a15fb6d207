"""Query parameter parsing for the listing endpoints."""

from typing import List, Optional

from fastapi import Query

from storefront_backend.interfaces.base import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from storefront_backend.interfaces.products import MAX_PRICE, ProductQuery


def product_query_params(
    min_price: float = Query(0, ge=0, alias="minPrice"),
    max_price: float = Query(MAX_PRICE, ge=0, alias="maxPrice"),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    last_categories: Optional[List[int]] = Query(None, alias="lastCategories"),
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order_by_type: Optional[str] = Query(None, alias="orderByType"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    page: int = Query(0, ge=0),
) -> ProductQuery:
    """`lastCategories` is repeated: ?lastCategories=3&lastCategories=5"""
    return ProductQuery(
        min_price=min_price,
        max_price=max_price,
        category_id=category_id,
        last_categories=last_categories or [],
        order_by=order_by,
        order_by_type=order_by_type,
        limit=limit,
        page=page,
    )
