"""
Bearer token authentication.

Tokens are opaque random strings issued by POST /auth/login. Only their
SHA-256 hash is stored in Redis, under `session:{hash}`, with a TTL.
"""

import hashlib
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param

from storefront_backend.cache import Cache
from storefront_backend.dependencies import get_locale
from storefront_backend.exceptions import UnauthorizedException
from storefront_backend.permissions.principal import Principal
from storefront_backend.redis_cache import get_cache

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def session_key(cache: Cache, token: str) -> str:
    """`storefront:session:{sha256(token)}`; the plain token is never stored."""
    return cache.k("session", hash_token(token))


def parse_bearer_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("Authorization")
    scheme, param = get_authorization_scheme_param(authorization)
    if not authorization or scheme.lower() != "bearer" or not param:
        return None
    return param


def get_current_principal(
    request: Request,
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
) -> Principal:
    """
    Main dependency for getting the current authenticated principal.

    Raises:
        UnauthorizedException: If the token is missing, unknown or expired
    """
    token = parse_bearer_token(request)
    if token is None:
        raise UnauthorizedException(message_key="invalid_authentication", locale=locale)

    session = cache.get_by_key(session_key(cache, token))
    if not session or "user_id" not in session:
        logger.debug("Rejected unknown or expired bearer token")
        raise UnauthorizedException(message_key="invalid_authentication", locale=locale)

    return Principal(user_id=int(session["user_id"]))
