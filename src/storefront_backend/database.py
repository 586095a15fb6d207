"""
Engine, session factory and the request-scoped session dependency.

The URL is DATABASE_URL if set, otherwise it is assembled from POSTGRES_*.
"""

import os
from typing import Generator

import sqlalchemy.exc as sa_exc
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool


def database_url() -> str:
    url = os.environ.get("DATABASE_URL")
    if url:
        return url

    return "postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}".format(
        user=os.environ.get("POSTGRES_USER", "postgres"),
        password=os.environ.get("POSTGRES_PASSWORD", ""),
        host=os.environ.get("POSTGRES_HOST", "localhost"),
        port=os.environ.get("POSTGRES_PORT", "5432"),
        name=os.environ.get("POSTGRES_DB", "storefront"),
    )


_engine = create_engine(
    database_url(),
    poolclass=QueuePool,
    pool_size=int(os.environ.get("DB_POOL_SIZE", "10")),
    max_overflow=int(os.environ.get("DB_MAX_OVERFLOW", "20")),
    pool_timeout=30,
    pool_recycle=1800,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(
    bind=_engine,
    class_=Session,
    autoflush=False,
    expire_on_commit=False,  # DTOs are built after commit
)


def get_engine() -> Engine:
    return _engine


def get_db() -> Generator[Session, None, None]:
    """
    One session per request: committed when the endpoint returns, rolled
    back when it raises.

    Raises:
        ServiceUnavailableException: If no pooled connection frees up in time
    """
    from storefront_backend.exceptions import ServiceUnavailableException

    db = SessionLocal()
    try:
        yield db
        db.commit()
    except sa_exc.TimeoutError as e:
        db.rollback()
        raise ServiceUnavailableException(
            message_key="database_busy",
            headers={"Retry-After": "2"},
        ) from e
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
