from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
