import logging
from typing import List

from sqlalchemy.orm import Session

from storefront_backend.exceptions import BadRequestException
from storefront_backend.interfaces.categories import CategoryCreate, CategoryGet
from storefront_backend.model.catalog import Category
from storefront_backend.repositories import CategoryRepository

logger = logging.getLogger(__name__)


def create_category(payload: CategoryCreate, db: Session, locale: str) -> int:
    category = CategoryRepository(db).create(Category(title=payload.title))
    logger.info(f"Created category {category.id} '{category.title}'")
    return category.id


def find_all_categories(db: Session, locale: str) -> List[CategoryGet]:
    return [CategoryGet.model_validate(c) for c in CategoryRepository(db).list_all()]


def find_category_by_id(category_id: int, db: Session, locale: str) -> CategoryGet:
    """
    Raises:
        BadRequestException: If the category does not exist
    """
    category = CategoryRepository(db).get_by_id_optional(category_id)
    if category is None:
        raise BadRequestException(
            message_key="category_not_found",
            locale=locale,
            context={"category_id": category_id},
        )
    return CategoryGet.model_validate(category)
