from .base import OrderedListQuery, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .auth import LoginRequest, LoginResponse, LogoutResponse
from .users import UserCreate, UserGet
from .companies import CompanyCreate, CompanyUpdate, CompanyGet
from .categories import CategoryCreate, CategoryGet
from .products import ProductCreate, ProductUpdate, ProductGet, ProductDetail, ProductList, ProductQuery, MAX_PRICE
from .reviews import ReviewCreate, ReviewUpdate, ReviewGet, ReviewQuery

__all__ = [
    "OrderedListQuery",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "UserCreate",
    "UserGet",
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyGet",
    "CategoryCreate",
    "CategoryGet",
    "ProductCreate",
    "ProductUpdate",
    "ProductGet",
    "ProductDetail",
    "ProductList",
    "ProductQuery",
    "MAX_PRICE",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewGet",
    "ReviewQuery",
]
