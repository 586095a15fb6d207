from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront_backend.business_logic.companies import (
    create_company,
    find_company_by_id,
    find_company_by_user_id,
    update_company,
)
from storefront_backend.database import get_db
from storefront_backend.dependencies import get_locale
from storefront_backend.interfaces.companies import CompanyCreate, CompanyGet, CompanyUpdate
from storefront_backend.permissions.auth import get_current_principal
from storefront_backend.permissions.principal import Principal

company_router = APIRouter()


@company_router.post("", status_code=201)
def create_company_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    payload: CompanyCreate,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    return {"id": create_company(permissions.user_id, payload, db=db, locale=locale)}


@company_router.get("", response_model=Optional[CompanyGet])
def get_own_company_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    """The company owned by the caller, or null."""
    return find_company_by_user_id(permissions.user_id, db=db, locale=locale)


@company_router.get("/{company_id}", response_model=CompanyGet)
def get_company_endpoint(
    company_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    return find_company_by_id(company_id, db=db, locale=locale)


@company_router.patch("/{company_id}", status_code=204)
def update_company_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    company_id: int,
    payload: CompanyUpdate,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    update_company(permissions.user_id, company_id, payload, db=db, locale=locale)
    return Response(status_code=204)
