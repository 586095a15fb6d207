"""
Product repository for direct database access with optional caching.
"""

from typing import Set
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.catalog import Product
from ..settings import settings


class ProductRepository(BaseRepository[Product]):
    """
    Repository for Product rows.

    Single products are cached by id when a cache is supplied.
    """

    entity_type = "product"

    def __init__(self, db: Session, cache=None):
        super().__init__(db, Product, cache)

    def get_ttl(self) -> int:
        return settings.PRODUCT_CACHE_TTL

    def get_entity_tags(self, entity: Product) -> Set[str]:
        """
        Tags:
        - product:{id} - The specific product
        - product:list - Every product listing page
        - review:list:product:{id} - Review pages that sort by product columns
        """
        return {
            f"product:{entity.id}",
            "product:list",
            f"review:list:product:{entity.id}",
        }
