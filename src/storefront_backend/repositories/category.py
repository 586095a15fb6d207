from typing import List
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.catalog import Category


class CategoryRepository(BaseRepository[Category]):

    def __init__(self, db: Session, cache=None):
        super().__init__(db, Category, cache)

    def list_all(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.title.asc(), Category.id.asc()).all()
