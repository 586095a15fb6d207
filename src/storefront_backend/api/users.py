from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront_backend.business_logic.users import create_user, find_user_by_id
from storefront_backend.database import get_db
from storefront_backend.dependencies import get_locale
from storefront_backend.interfaces.users import UserCreate, UserGet

user_router = APIRouter()


@user_router.post("", status_code=201)
def create_user_endpoint(
    payload: UserCreate,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    return {"id": create_user(payload, db=db, locale=locale)}


@user_router.get("/{user_id}", response_model=UserGet)
def get_user_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    return find_user_by_id(user_id, db=db, locale=locale)
