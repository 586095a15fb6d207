from typing import Annotated, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront_backend.business_logic.categories import (
    create_category,
    find_all_categories,
    find_category_by_id,
)
from storefront_backend.database import get_db
from storefront_backend.dependencies import get_locale
from storefront_backend.interfaces.categories import CategoryCreate, CategoryGet
from storefront_backend.permissions.auth import get_current_principal
from storefront_backend.permissions.principal import Principal

category_router = APIRouter()


@category_router.post("", status_code=201)
def create_category_endpoint(
    permissions: Annotated[Principal, Depends(get_current_principal)],
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    return {"id": create_category(payload, db=db, locale=locale)}


@category_router.get("", response_model=List[CategoryGet])
def list_categories_endpoint(
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    return find_all_categories(db=db, locale=locale)


@category_router.get("/{category_id}", response_model=CategoryGet)
def get_category_endpoint(
    category_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    return find_category_by_id(category_id, db=db, locale=locale)
