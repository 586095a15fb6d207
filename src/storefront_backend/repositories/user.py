from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.auth import User


class UserRepository(BaseRepository[User]):
    """Repository for User rows. Users are never cached; credentials live here."""

    def __init__(self, db: Session, cache=None):
        super().__init__(db, User, cache)

    def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email."""
        return self.db.query(User).filter(
            func.lower(User.email) == email.strip().lower()
        ).first()
