"""
Listing engine: filtered, sorted and paginated queries for products and reviews.

Sort columns come from fixed allow-lists mapped to ORM columns; anything else
is rejected before a query is built. Precedence for products:

1. an explicit ``order_by`` sorts by that column only;
2. otherwise a non-empty ``last_categories`` ranks products from those
   categories first, then ``id DESC``;
3. otherwise ``id DESC``.

Reviews always sort by ``created_at DESC`` first; an explicit ``order_by``
names a product column and is added as the secondary key.
"""

from typing import Dict, List, Optional

from sqlalchemy import case
from sqlalchemy.orm import Query, Session, joinedload

from storefront_backend.exceptions import BadRequestException
from storefront_backend.interfaces.products import ProductQuery
from storefront_backend.interfaces.reviews import ReviewQuery
from storefront_backend.model.catalog import Product
from storefront_backend.model.review import Review

SORT_DIRECTIONS = ("asc", "desc")
DEFAULT_SORT_DIRECTION = "desc"

PRODUCT_SORT_COLUMNS = {
    "id": Product.id,
    "title": Product.title,
    "price": Product.price,
    "createdAt": Product.created_at,
    "created_at": Product.created_at,
    "updatedAt": Product.updated_at,
    "updated_at": Product.updated_at,
}

# Review listings sort by columns of the joined product
REVIEW_SORT_COLUMNS = {
    "id": Product.id,
    "title": Product.title,
    "price": Product.price,
}


def parse_order_by_type(value: Optional[str], locale: str) -> Optional[str]:
    """
    Validate a sort direction token, case-insensitively.

    Returns:
        "asc", "desc", or None when no token was given

    Raises:
        BadRequestException: If the token is anything else
    """
    if value is None or value == "":
        return None

    direction = value.strip().lower()
    if direction not in SORT_DIRECTIONS:
        raise BadRequestException(
            message_key="invalid_order_by_type",
            locale=locale,
            context={"order_by_type": value},
        )
    return direction


def resolve_sort_column(value: Optional[str], allowed: Dict, locale: str):
    """
    Map a requested sort column to its ORM column.

    Raises:
        BadRequestException: If the column is not in the allow-list
    """
    if value is None or value == "":
        return None

    column = allowed.get(value)
    if column is None:
        raise BadRequestException(
            message_key="invalid_order_by",
            locale=locale,
            context={"order_by": value, "allowed": sorted(allowed)},
        )
    return column


def apply_direction(column, direction: Optional[str]):
    if (direction or DEFAULT_SORT_DIRECTION) == "asc":
        return column.asc()
    return column.desc()


def normalize_product_query(params: ProductQuery, locale: str) -> ProductQuery:
    """
    Validate listing parameters and reduce them to their effective form.

    The direction is lower-cased and dropped when there is no sort column,
    and the recently viewed categories are de-duplicated and sorted.

    Raises:
        BadRequestException: On an unknown column, a bad direction or min > max
    """
    direction = parse_order_by_type(params.order_by_type, locale)
    resolve_sort_column(params.order_by, PRODUCT_SORT_COLUMNS, locale)

    if params.min_price > params.max_price:
        raise BadRequestException(
            message_key="invalid_price_range",
            locale=locale,
            context={"min_price": params.min_price, "max_price": params.max_price},
        )

    order_by = params.order_by or None
    return params.model_copy(update={
        "order_by": order_by,
        "order_by_type": (direction or DEFAULT_SORT_DIRECTION) if order_by else None,
        "last_categories": sorted(set(params.last_categories or [])),
    })


def normalize_review_query(params: ReviewQuery, locale: str) -> ReviewQuery:
    direction = parse_order_by_type(params.order_by_type, locale)
    resolve_sort_column(params.order_by, REVIEW_SORT_COLUMNS, locale)

    order_by = params.order_by or None
    return params.model_copy(update={
        "order_by": order_by,
        "order_by_type": (direction or DEFAULT_SORT_DIRECTION) if order_by else None,
    })


def product_ordering(params: ProductQuery, locale: str) -> List:
    """ORDER BY clauses for a product listing, following the precedence above."""
    column = resolve_sort_column(params.order_by, PRODUCT_SORT_COLUMNS, locale)
    if column is not None:
        return [apply_direction(column, parse_order_by_type(params.order_by_type, locale))]

    if params.last_categories:
        pinned = case(
            (Product.category_id.in_(params.last_categories), 1),
            else_=0,
        )
        return [pinned.desc(), Product.id.desc()]

    return [Product.id.desc()]


def review_ordering(params: ReviewQuery, locale: str) -> List:
    clauses = [Review.created_at.desc()]

    column = resolve_sort_column(params.order_by, REVIEW_SORT_COLUMNS, locale)
    if column is not None:
        clauses.append(apply_direction(column, parse_order_by_type(params.order_by_type, locale)))

    return clauses


def paginate(query: Query, page: int, limit: int) -> Query:
    return query.offset(page * limit).limit(limit)


def build_product_listing_query(db: Session, params: ProductQuery, locale: str) -> Query:
    """
    Build the product listing query.

    Filters by price range (inclusive) and category when given, eagerly loads
    the category and applies ordering and pagination.
    """
    query = db.query(Product).options(joinedload(Product.category)).filter(
        Product.price.between(params.min_price, params.max_price)
    )

    if params.category_id is not None:
        query = query.filter(Product.category_id == params.category_id)

    query = query.order_by(*product_ordering(params, locale))
    return paginate(query, params.page, params.limit)


def build_review_listing_query(db: Session, params: ReviewQuery, locale: str) -> Query:
    query = (
        db.query(Review)
        .join(Product, Review.product_id == Product.id)
        .filter(Review.product_id == params.product_id)
    )

    query = query.order_by(*review_ordering(params, locale))
    return paginate(query, params.page, params.limit)
