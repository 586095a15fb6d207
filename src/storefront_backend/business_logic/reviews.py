"""Business logic for reviews."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront_backend.business_logic.listing import (
    build_review_listing_query,
    normalize_review_query,
)
from storefront_backend.cache import Cache
from storefront_backend.cache_keys import review_list_key
from storefront_backend.exceptions import BadRequestException, InternalServerException
from storefront_backend.interfaces.reviews import ReviewCreate, ReviewGet, ReviewQuery, ReviewUpdate
from storefront_backend.model.review import Review
from storefront_backend.permissions.ownership import ensure_review_author
from storefront_backend.repositories import DuplicateError, ProductRepository, ReviewRepository
from storefront_backend.settings import settings

logger = logging.getLogger(__name__)


def find_reviews_by_product(
    params: ReviewQuery,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> List[ReviewGet]:
    """
    Reviews of one product, newest first.

    Pages are cached per effective parameters for REVIEW_LIST_CACHE_TTL.

    Raises:
        BadRequestException: On an unknown sort column or direction
    """
    params = normalize_review_query(params, locale)

    key = review_list_key(params, prefix=cache.prefix) if cache is not None else None
    if cache is not None:
        cached = cache.get_by_key(key)
        if cached is not None:
            return [ReviewGet.model_validate(item) for item in cached]

    reviews = build_review_listing_query(db, params, locale).all()
    page = [ReviewGet.model_validate(review) for review in reviews]

    if cache is not None:
        cache.set_with_tags(
            key,
            [item.model_dump(mode="json") for item in page],
            tags={f"review:list:product:{params.product_id}"},
            ttl=settings.REVIEW_LIST_CACHE_TTL,
        )

    return page


def get_review(review_id: int, db: Session, locale: str, cache: Optional[Cache] = None) -> Review:
    review = ReviewRepository(db, cache).get_by_id_optional(review_id)
    if review is None:
        raise BadRequestException(
            message_key="review_not_found",
            locale=locale,
            context={"review_id": review_id},
        )
    return review


def find_review_by_id(
    review_id: int,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> ReviewGet:
    return ReviewGet.model_validate(get_review(review_id, db, locale, cache))


def create_review(
    user_id: int,
    payload: ReviewCreate,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> int:
    """
    Raises:
        BadRequestException: If the product does not exist
    """
    if not ProductRepository(db).exists(payload.product_id):
        raise BadRequestException(
            message_key="product_not_found",
            locale=locale,
            context={"product_id": payload.product_id},
        )

    try:
        review = ReviewRepository(db, cache).create(Review(**payload.model_dump(), user_id=user_id))
    except DuplicateError:
        # Product removed between the check and the insert
        raise BadRequestException(
            message_key="product_not_found",
            locale=locale,
            context={"product_id": payload.product_id},
        )

    logger.info(f"User {user_id} created review {review.id} for product {payload.product_id}")
    return review.id


def update_review(
    user_id: int,
    review_id: int,
    payload: ReviewUpdate,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> None:
    """
    Update a review written by the user.

    The author is read from the (possibly cached) review.

    Raises:
        BadRequestException: If the review does not exist
        ForbiddenException: If the user is not the author
        InternalServerException: If the row vanished before the write
    """
    review = get_review(review_id, db, locale, cache)
    ensure_review_author(user_id, review.user_id, locale, action="update")

    updates = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field == "text"
    }

    affected = ReviewRepository(db, cache).update_rows(review, updates)
    if affected == 0:
        raise InternalServerException(message_key="no_rows_updated", locale=locale, user_id=user_id)

    logger.info(f"User {user_id} updated review {review_id}")


def delete_review(
    user_id: int,
    review_id: int,
    db: Session,
    locale: str,
    cache: Optional[Cache] = None,
) -> None:
    review = get_review(review_id, db, locale, cache)
    ensure_review_author(user_id, review.user_id, locale, action="delete")

    affected = ReviewRepository(db, cache).delete_rows(review)
    if affected == 0:
        raise InternalServerException(message_key="no_rows_updated", locale=locale, user_id=user_id)

    logger.info(f"User {user_id} deleted review {review_id}")
