"""
Cache keys for listing pages and single entities.

Keys are pure functions of the effective request parameters: defaults are
applied, the sort direction is lower-cased and the recently viewed categories
are de-duplicated and sorted (their order does not change the result). Equal
effective parameters give equal keys; any other difference changes the key.
"""

from typing import Any, Dict

from storefront_backend.cache import CACHE_PREFIX, stable_key
from storefront_backend.interfaces.products import ProductQuery
from storefront_backend.interfaces.reviews import ReviewQuery


def _direction(value) -> Any:
    return value.lower() if isinstance(value, str) else value


def product_list_params(params: ProductQuery) -> Dict[str, Any]:
    return {
        "min_price": float(params.min_price),
        "max_price": float(params.max_price),
        "category_id": params.category_id,
        "order_by": params.order_by,
        "order_by_type": _direction(params.order_by_type),
        "last_categories": sorted(set(params.last_categories or [])),
        "limit": params.limit,
        "page": params.page,
    }


def review_list_params(params: ReviewQuery) -> Dict[str, Any]:
    return {
        "product_id": params.product_id,
        "order_by": params.order_by,
        "order_by_type": _direction(params.order_by_type),
        "limit": params.limit,
        "page": params.page,
    }


def product_list_key(params: ProductQuery, prefix: str = CACHE_PREFIX) -> str:
    """
    Example:
        >>> product_list_key(ProductQuery(minPrice=10, maxPrice=50, lastCategories=[3]))
        'storefront:product:list:1f0c...'
    """
    return f"{prefix}:product:list:{stable_key(product_list_params(params))}"


def review_list_key(params: ReviewQuery, prefix: str = CACHE_PREFIX) -> str:
    """The product id stays readable in the key to ease debugging."""
    return f"{prefix}:review:list:{params.product_id}:{stable_key(review_list_params(params))}"


def review_key(review_id: int, prefix: str = CACHE_PREFIX) -> str:
    return f"{prefix}:review:{review_id}"


def product_key(product_id: int, prefix: str = CACHE_PREFIX) -> str:
    return f"{prefix}:product:{product_id}"
