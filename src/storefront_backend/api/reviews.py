from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront_backend.business_logic.reviews import (
    create_review,
    delete_review,
    find_review_by_id,
    update_review,
)
from storefront_backend.cache import Cache
from storefront_backend.database import get_db
from storefront_backend.dependencies import get_locale
from storefront_backend.interfaces.reviews import ReviewCreate, ReviewGet, ReviewUpdate
from storefront_backend.permissions.auth import get_current_principal
from storefront_backend.permissions.principal import Principal
from storefront_backend.redis_cache import get_cache

review_router = APIRouter()


@review_router.post("", status_code=201)
def create_review_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    payload: ReviewCreate,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    return {"id": create_review(permissions.user_id, payload, db=db, cache=cache, locale=locale)}


@review_router.get("/{review_id}", response_model=ReviewGet)
def get_review_endpoint(
    review_id: int,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    """Served from the cache for up to REVIEW_CACHE_TTL seconds."""
    return find_review_by_id(review_id, db=db, cache=cache, locale=locale)


@review_router.patch("/{review_id}", status_code=204)
def update_review_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    review_id: int,
    payload: ReviewUpdate,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    update_review(permissions.user_id, review_id, payload, db=db, cache=cache, locale=locale)
    return Response(status_code=204)


@review_router.delete("/{review_id}", status_code=204)
def delete_review_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    review_id: int,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    delete_review(permissions.user_id, review_id, db=db, cache=cache, locale=locale)
    return Response(status_code=204)
