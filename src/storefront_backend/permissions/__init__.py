from .principal import Principal
from .ownership import is_owner, ensure_company_owner, ensure_review_author

__all__ = [
    "Principal",
    "is_owner",
    "ensure_company_owner",
    "ensure_review_author",
]
