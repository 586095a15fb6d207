"""
Shared fixtures: in-memory SQLite database, fakeredis-backed cache and
factories for the catalog entities.
"""

from datetime import datetime, timedelta, timezone
from itertools import count

import fakeredis
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront_backend.cache import Cache, CACHE_PREFIX
from storefront_backend.model import Base, Category, Company, Product, Review, User
from storefront_backend.permissions.auth import session_key

# Never verified; users that need to log in get a real hash
UNUSABLE_PASSWORD = "!unusable"

_clock = count()
_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _next_timestamp() -> datetime:
    """Strictly increasing timestamps so created_at ordering is deterministic."""
    return _BASE_TIME + timedelta(seconds=next(_clock))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    SessionTesting = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        class_=Session,
    )
    session = SessionTesting()
    yield session
    session.close()


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis()


@pytest.fixture
def cache(redis_client):
    return Cache(redis_client, prefix=CACHE_PREFIX, default_ttl=600)


@pytest.fixture
def make_user(db):
    emails = count(1)

    def _make(email=None, password=UNUSABLE_PASSWORD):
        user = User(email=email or f"user{next(emails)}@example.com", password=password)
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_company(db, make_user):
    def _make(owner=None, title="Acme"):
        owner = owner or make_user()
        company = Company(title=title, user_id=owner.id)
        db.add(company)
        db.commit()
        return company

    return _make


@pytest.fixture
def make_category(db):
    def _make(title="Category"):
        category = Category(title=title)
        db.add(category)
        db.commit()
        return category

    return _make


@pytest.fixture
def make_product(db):
    def _make(company, category, price=10.0, title="Product", **fields):
        product = Product(
            title=title,
            price=price,
            category_id=category.id,
            company_id=company.id,
            attributes=fields.pop("attributes", {}),
            created_at=fields.pop("created_at", _next_timestamp()),
            **fields,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def make_review(db):
    def _make(product, author, rating=5, text="Fine"):
        review = Review(
            product_id=product.id,
            user_id=author.id,
            rating=rating,
            text=text,
            created_at=_next_timestamp(),
        )
        db.add(review)
        db.commit()
        return review

    return _make


@pytest.fixture
def auth_headers(cache):
    """Open a session for a user and return the Authorization header."""
    tokens = count(1)

    def _headers(user):
        token = f"test-token-{user.id}-{next(tokens)}"
        cache.set_by_key(session_key(cache, token), {"user_id": user.id}, ttl=600)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client(db, cache):
    from fastapi.testclient import TestClient

    from storefront_backend.database import get_db
    from storefront_backend.redis_cache import get_cache
    from storefront_backend.server import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_cache] = lambda: cache

    yield TestClient(app)

    app.dependency_overrides.clear()
