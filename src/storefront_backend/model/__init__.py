from .base import Base, metadata
from .auth import User
from .catalog import Category, Company, Product
from .review import Review

__all__ = [
    'Base',
    'metadata',
    'User',
    'Category',
    'Company',
    'Product',
    'Review',
]
