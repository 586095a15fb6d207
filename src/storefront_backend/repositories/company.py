from typing import Optional
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.catalog import Company


class CompanyRepository(BaseRepository[Company]):
    """Repository for Company rows; resolves the owner used by the product gate."""

    def __init__(self, db: Session, cache=None):
        super().__init__(db, Company, cache)

    def find_by_user_id(self, user_id: int) -> Optional[Company]:
        return self.find_one_by(user_id=user_id)
