"""Business logic for users. Passwords are stored as Argon2 hashes only."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from storefront_backend.exceptions import BadRequestException
from storefront_backend.interfaces.users import UserCreate, UserGet
from storefront_backend.model.auth import User
from storefront_backend.repositories import DuplicateError, UserRepository
from storefront_backend.utils.password import hash_password

logger = logging.getLogger(__name__)


def create_user(payload: UserCreate, db: Session, locale: str) -> int:
    """
    Register a user.

    Raises:
        BadRequestException: If the email is already registered
    """
    repo = UserRepository(db)
    email = payload.email.strip().lower()

    if repo.find_by_email(email) is not None:
        raise BadRequestException(message_key="email_already_exists", locale=locale)

    try:
        user = repo.create(User(email=email, password=hash_password(payload.password)))
    except DuplicateError:
        raise BadRequestException(message_key="email_already_exists", locale=locale)

    logger.info(f"Registered user {user.id}")
    return user.id


def find_user_by_id(user_id: int, db: Session, locale: str) -> UserGet:
    """
    Raises:
        BadRequestException: If the user does not exist
    """
    user = UserRepository(db).get_by_id_optional(user_id)
    if user is None:
        raise BadRequestException(message_key="user_not_found", locale=locale, context={"user_id": user_id})
    return UserGet.model_validate(user)


def find_user_by_email(email: str, db: Session) -> Optional[User]:
    return UserRepository(db).find_by_email(email)
