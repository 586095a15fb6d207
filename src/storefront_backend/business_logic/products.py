"""Business logic for products: cached listing and owner-gated mutations."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront_backend.business_logic.listing import (
    build_product_listing_query,
    normalize_product_query,
)
from storefront_backend.cache import Cache
from storefront_backend.cache_keys import product_list_key
from storefront_backend.exceptions import BadRequestException, InternalServerException
from storefront_backend.interfaces.companies import CompanyGet
from storefront_backend.interfaces.products import (
    ProductCreate,
    ProductDetail,
    ProductList,
    ProductQuery,
    ProductUpdate,
)
from storefront_backend.model.catalog import Product
from storefront_backend.permissions.ownership import ensure_company_owner
from storefront_backend.repositories import (
    CategoryRepository,
    CompanyRepository,
    DuplicateError,
    ProductRepository,
)
from storefront_backend.settings import settings

logger = logging.getLogger(__name__)


def _list_tags(params: ProductQuery) -> set:
    tags = {"product:list"}
    if params.category_id is not None:
        tags.add(f"product:list:category:{params.category_id}")
    return tags


def _ensure_category_exists(category_id: int, db: Session, locale: str) -> None:
    if not CategoryRepository(db).exists(category_id):
        raise BadRequestException(
            message_key="category_not_found",
            locale=locale,
            context={"category_id": category_id},
        )


def list_products(
    params: ProductQuery,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> List[ProductList]:
    """
    List products by price range, category, sort column and recently viewed
    categories.

    A cached page is returned verbatim until PRODUCT_LIST_CACHE_TTL expires,
    even if products change in the meantime.

    Raises:
        BadRequestException: On invalid sort parameters, an inverted price
            range or an unknown category
    """
    params = normalize_product_query(params, locale)

    key = product_list_key(params, prefix=cache.prefix) if cache is not None else None
    if cache is not None:
        cached = cache.get_by_key(key)
        if cached is not None:
            return [ProductList.model_validate(item) for item in cached]

    if params.category_id is not None:
        _ensure_category_exists(params.category_id, db, locale)

    products = build_product_listing_query(db, params, locale).all()
    page = [ProductList.model_validate(product, from_attributes=True) for product in products]

    if cache is not None:
        cache.set_with_tags(
            key,
            [item.model_dump(mode="json") for item in page],
            tags=_list_tags(params),
            ttl=settings.PRODUCT_LIST_CACHE_TTL,
        )

    return page


def get_product(product_id: int, db: Session, locale: str, cache: Optional[Cache] = None) -> Product:
    """
    Load a product row (possibly a cached, detached copy).

    Raises:
        BadRequestException: If the product does not exist
    """
    product = ProductRepository(db, cache).get_by_id_optional(product_id)
    if product is None:
        raise BadRequestException(
            message_key="product_not_found",
            locale=locale,
            context={"product_id": product_id},
        )
    return product


def find_product_by_id(
    product_id: int,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> ProductDetail:
    """Product with its company; the product row itself is read through the cache."""
    product = get_product(product_id, db, locale, cache)
    company = CompanyRepository(db).get_by_id_optional(product.company_id)

    detail = ProductDetail.model_validate(product, from_attributes=True)
    if company is not None:
        detail.company = CompanyGet.model_validate(company)
    return detail


def create_product(
    user_id: int,
    payload: ProductCreate,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> int:
    """
    Create a product for the company owned by the user.

    Raises:
        BadRequestException: If the user has no company or the category
            does not exist; nothing is inserted in either case
    """
    company = CompanyRepository(db).find_by_user_id(user_id)
    if company is None:
        raise BadRequestException(message_key="user_company_is_null", locale=locale, user_id=user_id)

    _ensure_category_exists(payload.category_id, db, locale)

    try:
        product = ProductRepository(db, cache).create(Product(**payload.model_dump(), company_id=company.id))
    except DuplicateError:
        # Category removed between the check and the insert
        raise BadRequestException(
            message_key="category_not_found",
            locale=locale,
            context={"category_id": payload.category_id},
        )

    logger.info(f"User {user_id} created product {product.id} in company {company.id}")
    return product.id


def _authorize_product_mutation(
    user_id: int,
    product_id: int,
    db: Session,
    locale: str,
    cache: Optional[Cache],
) -> Product:
    product = get_product(product_id, db, locale, cache)
    company = CompanyRepository(db).get_by_id_optional(product.company_id)
    ensure_company_owner(user_id, company.user_id if company else None, locale)
    return product


def update_product(
    user_id: int,
    product_id: int,
    payload: ProductUpdate,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> None:
    """
    Update a product owned by the user's company.

    Raises:
        BadRequestException: If the product or the new category does not exist
        UnauthorizedException: If the user does not own the product's company
        InternalServerException: If the row vanished before the write
    """
    product = _authorize_product_mutation(user_id, product_id, db, locale, cache)

    # Only description may be cleared; other columns are NOT NULL
    updates = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    if updates.get("category_id") is not None:
        _ensure_category_exists(updates["category_id"], db, locale)

    affected = ProductRepository(db, cache).update_rows(product, updates)
    if affected == 0:
        raise InternalServerException(message_key="no_rows_updated", locale=locale, user_id=user_id)

    logger.info(f"User {user_id} updated product {product_id}: {sorted(updates)}")


def delete_product(
    user_id: int,
    product_id: int,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> None:
    product = _authorize_product_mutation(user_id, product_id, db, locale, cache)

    affected = ProductRepository(db, cache).delete_rows(product)
    if affected == 0:
        raise InternalServerException(message_key="no_rows_updated", locale=locale, user_id=user_id)

    logger.info(f"User {user_id} deleted product {product_id}")
