"""
Owner gate for mutations.

A mutation is allowed only when the acting user is the owner of the resource:
the company owner for products and companies, the author for reviews. The two
failure kinds stay distinct: product owners get 401, review authors get 403.
"""

import logging
from typing import Optional

from storefront_backend.exceptions import ForbiddenException, UnauthorizedException

logger = logging.getLogger(__name__)


def is_owner(acting_user_id: int, owner_id: Optional[int]) -> bool:
    return owner_id is not None and acting_user_id == owner_id


def ensure_company_owner(acting_user_id: int, owner_id: Optional[int], locale: str) -> None:
    """
    Raises:
        UnauthorizedException: If the acting user does not own the company
    """
    if not is_owner(acting_user_id, owner_id):
        logger.warning(f"User {acting_user_id} denied: company owned by {owner_id}")
        raise UnauthorizedException(
            message_key="user_does_not_own_company",
            locale=locale,
            user_id=acting_user_id,
        )


def ensure_review_author(
    acting_user_id: int,
    author_id: Optional[int],
    locale: str,
    action: str = "update",
) -> None:
    """
    Raises:
        ForbiddenException: If the acting user did not write the review
    """
    if not is_owner(acting_user_id, author_id):
        logger.warning(f"User {acting_user_id} denied review {action}: author is {author_id}")
        raise ForbiddenException(
            message_key=f"forbidden_{action}_review",
            locale=locale,
            user_id=acting_user_id,
        )
