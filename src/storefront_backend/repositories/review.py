"""
Review repository for direct database access with optional caching.
"""

from typing import Set
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.review import Review
from ..settings import settings


class ReviewRepository(BaseRepository[Review]):
    """
    Repository for Review rows.

    Reviews are cached by id; update and delete read the author from the
    cached copy, so a cached review may be up to REVIEW_CACHE_TTL old.
    """

    entity_type = "review"

    def __init__(self, db: Session, cache=None):
        super().__init__(db, Review, cache)

    def get_ttl(self) -> int:
        return settings.REVIEW_CACHE_TTL

    def get_entity_tags(self, entity: Review) -> Set[str]:
        """
        Tags:
        - review:{id} - The specific review
        - review:list:product:{product_id} - Review pages of the product
        """
        return {
            f"review:{entity.id}",
            f"review:list:product:{entity.product_id}",
        }
