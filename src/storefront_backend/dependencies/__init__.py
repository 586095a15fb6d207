"""
FastAPI dependencies for storefront-backend.

The request locale is resolved once from Accept-Language and then passed
explicitly to every business logic call.
"""

from typing import Optional

from fastapi import Header

from storefront_backend.i18n import parse_accept_language


def get_locale(accept_language: Optional[str] = Header(None)) -> str:
    return parse_accept_language(accept_language)


__all__ = [
    "get_locale",
]
