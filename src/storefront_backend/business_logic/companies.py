"""Business logic for companies. A user owns at most one company."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from storefront_backend.exceptions import BadRequestException, InternalServerException
from storefront_backend.interfaces.companies import CompanyCreate, CompanyGet, CompanyUpdate
from storefront_backend.model.catalog import Company
from storefront_backend.permissions.ownership import ensure_company_owner
from storefront_backend.repositories import CompanyRepository, DuplicateError

logger = logging.getLogger(__name__)


def create_company(user_id: int, payload: CompanyCreate, db: Session, locale: str) -> int:
    """
    Create the company owned by the user.

    Raises:
        BadRequestException: If the user already owns a company
    """
    repo = CompanyRepository(db)
    if repo.find_by_user_id(user_id) is not None:
        raise BadRequestException(message_key="user_already_has_company", locale=locale, user_id=user_id)

    try:
        company = repo.create(Company(title=payload.title, user_id=user_id))
    except DuplicateError:
        # Lost a race against a concurrent create for the same user
        raise BadRequestException(message_key="user_already_has_company", locale=locale, user_id=user_id)

    logger.info(f"User {user_id} created company {company.id}")
    return company.id


def _get_company(company_id: int, db: Session, locale: str) -> Company:
    company = CompanyRepository(db).get_by_id_optional(company_id)
    if company is None:
        raise BadRequestException(
            message_key="company_not_found",
            locale=locale,
            context={"company_id": company_id},
        )
    return company


def find_company_by_id(company_id: int, db: Session, locale: str) -> CompanyGet:
    return CompanyGet.model_validate(_get_company(company_id, db, locale))


def find_company_by_user_id(user_id: int, db: Session, locale: str) -> Optional[CompanyGet]:
    company = CompanyRepository(db).find_by_user_id(user_id)
    return CompanyGet.model_validate(company) if company is not None else None


def update_company(
    user_id: int,
    company_id: int,
    payload: CompanyUpdate,
    db: Session,
    locale: str,
) -> None:
    """
    Raises:
        BadRequestException: If the company does not exist
        UnauthorizedException: If the user does not own the company
        InternalServerException: If the row vanished before the write
    """
    company = _get_company(company_id, db, locale)
    ensure_company_owner(user_id, company.user_id, locale)

    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    affected = CompanyRepository(db).update_rows(company, updates)
    if affected == 0:
        raise InternalServerException(message_key="no_rows_updated", locale=locale, user_id=user_id)

    logger.info(f"User {user_id} updated company {company_id}")
