"""
Login and logout with opaque bearer tokens.

The plain token is returned to the client once; Redis only holds its SHA-256
hash under `session:{hash}`, expiring after ACCESS_TOKEN_TTL seconds.
"""

import logging
import secrets

from sqlalchemy.orm import Session

from storefront_backend.business_logic.users import find_user_by_email
from storefront_backend.cache import Cache
from storefront_backend.exceptions import UnauthorizedException
from storefront_backend.interfaces.auth import LoginRequest, LoginResponse
from storefront_backend.permissions.auth import session_key
from storefront_backend.repositories import UserRepository
from storefront_backend.settings import settings
from storefront_backend.utils.password import hash_password, needs_rehash, verify_password

logger = logging.getLogger(__name__)


def login(credentials: LoginRequest, db: Session, cache: Cache, locale: str) -> LoginResponse:
    """
    Verify the credentials and open a session.

    Raises:
        UnauthorizedException: If the email is unknown or the password is wrong
    """
    user = find_user_by_email(credentials.email, db)
    if user is None or not verify_password(credentials.password, user.password):
        logger.warning("Failed login attempt")
        raise UnauthorizedException(message_key="invalid_credentials", locale=locale)

    if needs_rehash(user.password):
        UserRepository(db).update_rows(user, {"password": hash_password(credentials.password)})
        logger.info(f"Upgraded password hash of user {user.id}")

    token = secrets.token_urlsafe(32)
    cache.set_by_key(
        session_key(cache, token),
        {"user_id": user.id},
        ttl=settings.ACCESS_TOKEN_TTL,
    )

    logger.info(f"User {user.id} logged in")
    return LoginResponse(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_TTL,
        user_id=user.id,
    )


def logout(token: str, cache: Cache) -> None:
    cache.delete_by_key(session_key(cache, token))
    logger.info("Session closed")
