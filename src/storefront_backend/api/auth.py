from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from storefront_backend.business_logic.auth import login, logout
from storefront_backend.cache import Cache
from storefront_backend.database import get_db
from storefront_backend.dependencies import get_locale
from storefront_backend.exceptions import UnauthorizedException
from storefront_backend.interfaces.auth import LoginRequest, LoginResponse, LogoutResponse
from storefront_backend.permissions.auth import parse_bearer_token
from storefront_backend.redis_cache import get_cache

auth_router = APIRouter()


@auth_router.post("/login", response_model=LoginResponse)
def login_endpoint(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    """Exchange email and password for a bearer token."""
    return login(credentials, db=db, cache=cache, locale=locale)


@auth_router.post("/logout", response_model=LogoutResponse)
def logout_endpoint(
    request: Request,
    cache: Cache = Depends(get_cache),
    locale: str = Depends(get_locale),
):
    token = parse_bearer_token(request)
    if token is None:
        raise UnauthorizedException(message_key="invalid_authentication", locale=locale)

    logout(token, cache=cache)
    return LogoutResponse()
