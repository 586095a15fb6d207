from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from storefront_backend.api.dependencies import product_query_params
from storefront_backend.business_logic.products import (
    create_product,
    delete_product,
    find_product_by_id,
    list_products,
    update_product,
)
from storefront_backend.business_logic.reviews import find_reviews_by_product
from storefront_backend.cache import Cache
from storefront_backend.database import get_db
from storefront_backend.dependencies import get_locale
from storefront_backend.interfaces.base import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from storefront_backend.interfaces.products import (
    ProductCreate,
    ProductDetail,
    ProductList,
    ProductQuery,
    ProductUpdate,
)
from storefront_backend.interfaces.reviews import ReviewGet, ReviewQuery
from storefront_backend.permissions.auth import get_current_principal
from storefront_backend.permissions.principal import Principal
from storefront_backend.redis_cache import get_cache

product_router = APIRouter()


@product_router.get("", response_model=List[ProductList])
def list_products_endpoint(
    params: ProductQuery = Depends(product_query_params),
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    """
    List products.

    Pages are cached for PRODUCT_LIST_CACHE_TTL seconds and may not reflect
    writes made in that window.
    """
    return list_products(params, db=db, cache=cache, locale=locale)


@product_router.post("", status_code=201)
def create_product_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    payload: ProductCreate,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    return {"id": create_product(permissions.user_id, payload, db=db, cache=cache, locale=locale)}


@product_router.get("/{product_id}", response_model=ProductDetail)
def get_product_endpoint(
    product_id: int,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    return find_product_by_id(product_id, db=db, cache=cache, locale=locale)


@product_router.patch("/{product_id}", status_code=204)
def update_product_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    update_product(permissions.user_id, product_id, payload, db=db, cache=cache, locale=locale)
    return Response(status_code=204)


@product_router.delete("/{product_id}", status_code=204)
def delete_product_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    product_id: int,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    delete_product(permissions.user_id, product_id, db=db, cache=cache, locale=locale)
    return Response(status_code=204)


@product_router.get("/{product_id}/reviews", response_model=List[ReviewGet])
def list_product_reviews_endpoint(
    product_id: int,
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order_by_type: Optional[str] = Query(None, alias="orderByType"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    page: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    params = ReviewQuery(
        product_id=product_id,
        order_by=order_by,
        order_by_type=order_by_type,
        limit=limit,
        page=page,
    )
    return find_reviews_by_product(params, db=db, cache=cache, locale=locale)
