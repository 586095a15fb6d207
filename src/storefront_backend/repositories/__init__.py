"""
Repository layer for direct database access.

Each repository wraps one SQLAlchemy model and optionally a Cache.
"""

from .base import BaseRepository, RepositoryError, DuplicateError
from .user import UserRepository
from .company import CompanyRepository
from .category import CategoryRepository
from .product import ProductRepository
from .review import ReviewRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "DuplicateError",
    "UserRepository",
    "CompanyRepository",
    "CategoryRepository",
    "ProductRepository",
    "ReviewRepository",
]
